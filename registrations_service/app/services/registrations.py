from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from datetime import datetime, timezone
from logging import getLogger
from typing import Sequence

from fastapi import status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from common import CurrentUser

from ..config import Settings
from ..models import BUNDLE_COURSE_ID, Course, PaymentOption, Registration, Student
from ..schemas import (
	BundlePriceOut,
	RegistrationDetails,
	RegistrationFilter,
	StudentRegistrationOut,
)
from ..storage import (
	InvalidUploadError,
	StorageBucketError,
	StorageFactory,
	StorageNotConfiguredError,
	StorageUploadError,
	check_image,
	screenshot_object_name,
)
from .lifecycle import LifecycleError, PaymentTerms, confirm, resolve_payment_terms, status_label
from .pricing import bundle_price, discount_percent, effective_price

logger = getLogger(__name__)

MISSING_SCREENSHOT_MESSAGE = "Please upload a screenshot of your payment."


class RegistrationServiceError(Exception):
	def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
		super().__init__(message)
		self.message = message
		self.status_code = status_code


@dataclass
class Screenshot:
	data: bytes
	content_type: str | None


def registration_id(student_id: str, course_id: str) -> str:
	return f"{student_id}_{course_id}"


def decode_base64_image(value: str, content_type: str | None) -> Screenshot:
	"""Decode a plain base64 string or a ``data:image/...;base64,`` URL."""
	if value.startswith("data:"):
		header, _, value = value.partition(",")
		declared = header[len("data:"):].split(";", 1)[0]
		content_type = declared or content_type
	try:
		data = base64.b64decode(value, validate=True)
	except (binascii.Error, ValueError) as exc:
		raise RegistrationServiceError("File is not valid base64") from exc
	return Screenshot(data=data, content_type=content_type)


async def upload_screenshot(
	storage_factory: StorageFactory,
	*,
	owner_id: str,
	screenshot: Screenshot,
	max_bytes: int,
) -> str:
	"""Validate an image and store it, returning its public URL."""
	try:
		check_image(screenshot.data, screenshot.content_type, max_bytes=max_bytes)
	except InvalidUploadError as exc:
		raise RegistrationServiceError(str(exc)) from exc

	try:
		storage = storage_factory()
	except StorageNotConfiguredError as exc:
		raise RegistrationServiceError(str(exc), status.HTTP_503_SERVICE_UNAVAILABLE) from exc

	object_name = screenshot_object_name(owner_id, screenshot.content_type)
	try:
		return await run_in_threadpool(storage.upload_image, object_name, screenshot.data, screenshot.content_type)
	except (StorageBucketError, StorageUploadError) as exc:
		logger.exception("Screenshot upload failed for %s", owner_id)
		raise RegistrationServiceError("Failed to upload screenshot", status.HTTP_502_BAD_GATEWAY) from exc


def build_student_registration_out(
	registration: Registration,
	course: Course | None,
) -> StudentRegistrationOut:
	whatsapp_link = None
	if registration.confirmed and course is not None and course.whatsapp_link:
		whatsapp_link = course.whatsapp_link
	return StudentRegistrationOut(
		id=registration.id,
		course_id=registration.course_id,
		course_name=course.name if course is not None else registration.course_name,
		payment_option=registration.payment_option,
		payment_status=registration.payment_status,
		status_label=status_label(registration.payment_status, registration.confirmed),
		confirmed=registration.confirmed,
		price_offered=registration.price_offered,
		amount_paid=registration.amount_paid,
		registered_at=registration.registered_at,
		whatsapp_link=whatsapp_link,
	)


class RegistrationService:
	def __init__(self, db: AsyncSession, settings: Settings):
		self.db = db
		self.settings = settings

	async def register(
		self,
		student: CurrentUser,
		course_id: str,
		details: RegistrationDetails,
		screenshot: Screenshot | None,
		storage_factory: StorageFactory,
	) -> Registration:
		if screenshot is None or not screenshot.data:
			raise RegistrationServiceError(MISSING_SCREENSHOT_MESSAGE)

		course = await self.db.get(Course, course_id)
		if course is None:
			raise RegistrationServiceError("Course not found", status.HTTP_404_NOT_FOUND)

		terms = self._payment_terms(details.payment_option, effective_price(course))
		return await self._create(
			student,
			course_id=course.id,
			course_name=course.name,
			details=details,
			terms=terms,
			screenshot=screenshot,
			storage_factory=storage_factory,
		)

	async def register_bundle(
		self,
		student: CurrentUser,
		details: RegistrationDetails,
		screenshot: Screenshot | None,
		storage_factory: StorageFactory,
	) -> Registration:
		if screenshot is None or not screenshot.data:
			raise RegistrationServiceError(MISSING_SCREENSHOT_MESSAGE)
		if details.payment_option != PaymentOption.FULL:
			raise RegistrationServiceError("The course bundle can only be bought with a full payment")

		terms = self._payment_terms(PaymentOption.FULL, await self.current_bundle_price())
		return await self._create(
			student,
			course_id=BUNDLE_COURSE_ID,
			course_name=self.settings.bundle_name,
			details=details,
			terms=terms,
			screenshot=screenshot,
			storage_factory=storage_factory,
		)

	def _payment_terms(self, payment_option: PaymentOption, price_offered: int) -> PaymentTerms:
		try:
			return resolve_payment_terms(
				payment_option,
				price_offered=price_offered,
				seat_lock_amount=self.settings.seat_lock_amount,
			)
		except LifecycleError as exc:
			raise RegistrationServiceError(str(exc)) from exc

	async def _create(
		self,
		student: CurrentUser,
		*,
		course_id: str,
		course_name: str,
		details: RegistrationDetails,
		terms: PaymentTerms,
		screenshot: Screenshot,
		storage_factory: StorageFactory,
	) -> Registration:
		record_id = registration_id(student.id, course_id)
		if await self.db.get(Registration, record_id) is not None:
			raise RegistrationServiceError("You have already registered for this course", status.HTTP_409_CONFLICT)

		phone = await self._student_phone(student)
		screenshot_url = await upload_screenshot(
			storage_factory,
			owner_id=student.id,
			screenshot=screenshot,
			max_bytes=self.settings.max_screenshot_bytes,
		)

		registration = Registration(
			id=record_id,
			student_id=student.id,
			course_id=course_id,
			course_name=course_name,
			name=details.name,
			email=str(details.email),
			phone=phone,
			college=details.college,
			screenshot_url=screenshot_url,
			price_offered=terms.price_offered,
			amount_paid=terms.amount_paid,
			payment_option=terms.payment_option.value,
			payment_status=terms.payment_status.value,
			confirmed=False,
			confirmed_at=None,
			registered_at=datetime.now(timezone.utc),
		)
		self.db.add(registration)
		try:
			await self.db.commit()
		except IntegrityError as exc:
			await self.db.rollback()
			raise RegistrationServiceError(
				"You have already registered for this course", status.HTTP_409_CONFLICT
			) from exc
		await self.db.refresh(registration)
		logger.info(
			"Registration %s created (%s, paid %s of %s)",
			registration.id,
			registration.payment_status,
			registration.amount_paid,
			registration.price_offered,
		)
		return registration

	async def _student_phone(self, student: CurrentUser) -> str:
		if student.phone:
			return student.phone
		record = await self.db.get(Student, student.id)
		if record is None:
			raise RegistrationServiceError("Student account not found", status.HTTP_401_UNAUTHORIZED)
		return record.phone

	async def list_for_student(self, student_id: str) -> list[StudentRegistrationOut]:
		result = await self.db.execute(
			select(Registration)
			.where(Registration.student_id == student_id)
			.order_by(Registration.registered_at.desc())
		)
		registrations = result.scalars().all()
		course_ids = {item.course_id for item in registrations}
		courses: dict[str, Course] = {}
		if course_ids:
			course_rows = await self.db.execute(select(Course).where(Course.id.in_(course_ids)))
			courses = {course.id: course for course in course_rows.scalars()}
		return [build_student_registration_out(item, courses.get(item.course_id)) for item in registrations]

	async def list_registrations(
		self,
		*,
		filter_by: RegistrationFilter = RegistrationFilter.ALL,
		search: str | None = None,
	) -> Sequence[Registration]:
		stmt = select(Registration).order_by(Registration.registered_at.desc())
		if filter_by == RegistrationFilter.CONFIRMED:
			stmt = stmt.where(Registration.confirmed.is_(True))
		elif filter_by == RegistrationFilter.PENDING:
			stmt = stmt.where(Registration.confirmed.is_(False))
		if search and search.strip():
			term = search.strip()
			stmt = stmt.where(
				or_(
					func.lower(Registration.name).contains(term.lower(), autoescape=True),
					Registration.phone.contains(term, autoescape=True),
				)
			)
		result = await self.db.execute(stmt)
		return result.scalars().all()

	async def confirm_registration(self, registration_id: str) -> Registration:
		registration = await self.db.get(Registration, registration_id)
		if registration is None:
			raise RegistrationServiceError("Registration not found", status.HTTP_404_NOT_FOUND)
		try:
			confirm(registration)
		except LifecycleError as exc:
			raise RegistrationServiceError(str(exc), status.HTTP_409_CONFLICT) from exc
		await self.db.commit()
		await self.db.refresh(registration)
		logger.info("Registration %s confirmed", registration.id)
		return registration

	async def confirmed_bundle_count(self) -> int:
		result = await self.db.execute(
			select(func.count())
			.select_from(Registration)
			.where(Registration.course_id == BUNDLE_COURSE_ID, Registration.confirmed.is_(True))
		)
		return int(result.scalar_one())

	async def current_bundle_price(self) -> int:
		settings = self.settings
		return bundle_price(
			await self.confirmed_bundle_count(),
			offer_price=settings.bundle_offer_price,
			base_price=settings.bundle_base_price,
			offer_slots=settings.bundle_offer_slots,
		)

	async def bundle_price_info(self) -> BundlePriceOut:
		price = await self.current_bundle_price()
		base = self.settings.bundle_base_price
		return BundlePriceOut(
			course_id=BUNDLE_COURSE_ID,
			name=self.settings.bundle_name,
			price=price,
			base_price=base,
			discount_percent=discount_percent(base, price),
		)
