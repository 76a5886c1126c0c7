from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from common import CurrentUser

from ..config import get_settings
from ..database import get_db
from ..models import PaymentOption
from ..realtime import publish_registrations
from ..schemas import (
	BundlePriceOut,
	PaymentInfo,
	RegistrationDetails,
	RegistrationOut,
	StudentRegistrationOut,
)
from ..security import get_current_student
from ..services import RegistrationService, RegistrationServiceError, Screenshot
from ..storage import StorageFactory, get_storage_factory

router = APIRouter(prefix="/api/registrations", tags=["registrations"])


def _handle_error(exc: RegistrationServiceError) -> HTTPException:
	return HTTPException(status_code=exc.status_code, detail=exc.message)


def _details(name: str, email: str, college: str, payment_option: PaymentOption) -> RegistrationDetails:
	try:
		return RegistrationDetails(name=name, email=email, college=college, payment_option=payment_option)
	except ValidationError as exc:
		raise RequestValidationError(exc.errors(include_url=False))


async def _read_screenshot(upload: UploadFile | None) -> Screenshot | None:
	if upload is None:
		return None
	data = await upload.read()
	if not data:
		return None
	return Screenshot(data=data, content_type=upload.content_type)


@router.get("/payment-info", response_model=PaymentInfo)
async def payment_info() -> PaymentInfo:
	settings = get_settings()
	return PaymentInfo(upi_id=settings.upi_id, seat_lock_amount=settings.seat_lock_amount)


@router.get("/bundle/price", response_model=BundlePriceOut)
async def get_bundle_price(db: AsyncSession = Depends(get_db)) -> BundlePriceOut:
	return await RegistrationService(db, get_settings()).bundle_price_info()


@router.get("/me", response_model=list[StudentRegistrationOut])
async def my_registrations(
	current_student: CurrentUser = Depends(get_current_student),
	db: AsyncSession = Depends(get_db),
) -> list[StudentRegistrationOut]:
	return await RegistrationService(db, get_settings()).list_for_student(current_student.id)


@router.post("/bundle", response_model=RegistrationOut, status_code=status.HTTP_201_CREATED)
async def register_bundle(
	name: Annotated[str, Form()],
	email: Annotated[str, Form()],
	college: Annotated[str, Form()],
	payment_option: Annotated[PaymentOption, Form()] = PaymentOption.FULL,
	screenshot: Annotated[UploadFile | None, File()] = None,
	current_student: CurrentUser = Depends(get_current_student),
	storage_factory: StorageFactory = Depends(get_storage_factory),
	db: AsyncSession = Depends(get_db),
) -> RegistrationOut:
	details = _details(name, email, college, payment_option)
	service = RegistrationService(db, get_settings())
	try:
		registration = await service.register_bundle(
			current_student,
			details,
			await _read_screenshot(screenshot),
			storage_factory,
		)
	except RegistrationServiceError as exc:
		raise _handle_error(exc)
	registration_out = RegistrationOut.model_validate(registration)
	await publish_registrations(service)
	return registration_out


@router.post("/{course_id}", response_model=RegistrationOut, status_code=status.HTTP_201_CREATED)
async def register_for_course(
	course_id: str,
	name: Annotated[str, Form()],
	email: Annotated[str, Form()],
	college: Annotated[str, Form()],
	payment_option: Annotated[PaymentOption, Form()] = PaymentOption.FULL,
	screenshot: Annotated[UploadFile | None, File()] = None,
	current_student: CurrentUser = Depends(get_current_student),
	storage_factory: StorageFactory = Depends(get_storage_factory),
	db: AsyncSession = Depends(get_db),
) -> RegistrationOut:
	details = _details(name, email, college, payment_option)
	service = RegistrationService(db, get_settings())
	try:
		registration = await service.register(
			current_student,
			course_id,
			details,
			await _read_screenshot(screenshot),
			storage_factory,
		)
	except RegistrationServiceError as exc:
		raise _handle_error(exc)
	registration_out = RegistrationOut.model_validate(registration)
	await publish_registrations(service)
	return registration_out
