from __future__ import annotations

from logging import getLogger

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from common import CurrentUser

from ..config import get_settings
from ..database import get_db
from ..models import AdminUser
from ..schemas import (
	AdminLogin,
	OtpRequest,
	OtpRequestOut,
	OtpVerify,
	SessionOut,
	StudentToken,
	Token,
)
from ..security import ROLE_ADMIN, ROLE_STUDENT, create_access_token, get_current_user, verify_password
from ..services import OtpService, OtpServiceError

logger = getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def _handle_error(exc: OtpServiceError) -> HTTPException:
	return HTTPException(status_code=exc.status_code, detail=exc.message)


@router.post("/student/otp", response_model=OtpRequestOut)
async def request_student_otp(payload: OtpRequest, db: AsyncSession = Depends(get_db)) -> OtpRequestOut:
	service = OtpService(db, get_settings())
	try:
		issued = await service.request_code(payload.phone)
	except OtpServiceError as exc:
		raise _handle_error(exc)
	return OtpRequestOut(expires_in=issued.expires_in, dev_code=issued.dev_code)


@router.post("/student/verify", response_model=StudentToken)
async def verify_student_otp(payload: OtpVerify, db: AsyncSession = Depends(get_db)) -> StudentToken:
	service = OtpService(db, get_settings())
	try:
		login = await service.verify_code(payload.phone, payload.code, redirect_to=payload.redirect_to)
	except OtpServiceError as exc:
		raise _handle_error(exc)

	token = create_access_token(
		login.student.id,
		role=ROLE_STUDENT,
		extra_claims={"phone": login.student.phone},
	)
	return StudentToken(
		access_token=token,
		student_id=login.student.id,
		returning=login.returning,
		welcome_name=login.welcome_name,
		redirect_to=login.redirect_to,
	)


@router.post("/admin/login", response_model=Token)
async def admin_login(payload: AdminLogin, db: AsyncSession = Depends(get_db)) -> Token:
	email = str(payload.email).lower()
	result = await db.execute(select(AdminUser).where(AdminUser.email == email))
	admin = result.scalar_one_or_none()
	if admin is None or not admin.is_active or not verify_password(payload.password, admin.hashed_password):
		logger.warning("Failed admin login for %s", email)
		raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect email or password")

	token = create_access_token(admin.id, role=ROLE_ADMIN, extra_claims={"email": admin.email})
	return Token(access_token=token)


@router.get("/me", response_model=SessionOut)
async def me(current_user: CurrentUser = Depends(get_current_user)) -> SessionOut:
	return SessionOut(
		id=current_user.id,
		role=current_user.role,
		email=current_user.email,
		phone=current_user.phone,
	)
