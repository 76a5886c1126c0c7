from __future__ import annotations

import hashlib
import hmac
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from logging import getLogger

import httpx
from fastapi import status
from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import Settings
from ..models import OtpChallenge, Registration, Student

logger = getLogger(__name__)

OTP_LENGTH = 6
SMS_TIMEOUT_SECONDS = 5.0
RETURNING_REDIRECT = "/student-home"
DEFAULT_REDIRECT = "/"


class OtpServiceError(Exception):
	def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
		super().__init__(message)
		self.message = message
		self.status_code = status_code


@dataclass
class IssuedOtp:
	expires_in: int
	dev_code: str | None = None


@dataclass
class StudentLogin:
	student: Student
	returning: bool
	welcome_name: str | None
	redirect_to: str


def _utcnow() -> datetime:
	return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
	# SQLite hands back naive datetimes
	if value.tzinfo is None:
		return value.replace(tzinfo=timezone.utc)
	return value


def hash_code(code: str) -> str:
	return hashlib.sha256(code.encode("utf-8")).hexdigest()


def generate_code() -> str:
	return f"{secrets.randbelow(10 ** OTP_LENGTH):0{OTP_LENGTH}d}"


class OtpService:
	"""Phone number login for students: one-time codes sent by SMS."""

	def __init__(self, db: AsyncSession, settings: Settings):
		self.db = db
		self.settings = settings

	async def request_code(self, phone: str) -> IssuedOtp:
		settings = self.settings
		if not settings.otp_dev_mode and not settings.sms_gateway_url:
			raise OtpServiceError("SMS delivery is not configured", status.HTTP_503_SERVICE_UNAVAILABLE)

		code = generate_code()
		# A new code replaces every outstanding one for this phone
		await self.db.execute(
			update(OtpChallenge)
			.where(OtpChallenge.phone == phone, OtpChallenge.consumed.is_(False))
			.values(consumed=True)
		)
		challenge = OtpChallenge(
			phone=phone,
			code_hash=hash_code(code),
			expires_at=_utcnow() + timedelta(seconds=settings.otp_ttl_seconds),
			attempts=0,
			consumed=False,
		)
		self.db.add(challenge)

		if settings.otp_dev_mode:
			await self.db.commit()
			logger.info("Issued dev-mode OTP for phone ending %s", phone[-4:])
			return IssuedOtp(expires_in=settings.otp_ttl_seconds, dev_code=code)

		await self._send_sms(phone, code)
		await self.db.commit()
		return IssuedOtp(expires_in=settings.otp_ttl_seconds)

	async def _send_sms(self, phone: str, code: str) -> None:
		settings = self.settings
		minutes = max(settings.otp_ttl_seconds // 60, 1)
		headers = {}
		if settings.sms_gateway_token:
			headers["Authorization"] = f"Bearer {settings.sms_gateway_token}"
		payload = {
			"to": f"{settings.phone_country_code}{phone}",
			"message": f"Your verification code is {code}. It expires in {minutes} minutes.",
		}
		try:
			async with httpx.AsyncClient(timeout=SMS_TIMEOUT_SECONDS) as client:
				response = await client.post(settings.sms_gateway_url, json=payload, headers=headers)
				response.raise_for_status()
		except httpx.HTTPError as exc:
			await self.db.rollback()
			logger.warning("SMS gateway rejected OTP delivery: %s", exc)
			raise OtpServiceError("Failed to send verification code", status.HTTP_502_BAD_GATEWAY) from exc

	async def verify_code(self, phone: str, code: str, *, redirect_to: str | None = None) -> StudentLogin:
		result = await self.db.execute(
			select(OtpChallenge)
			.where(OtpChallenge.phone == phone, OtpChallenge.consumed.is_(False))
			.order_by(OtpChallenge.id.desc())
			.limit(1)
		)
		challenge = result.scalar_one_or_none()
		if challenge is None:
			raise OtpServiceError("No active verification code, request a new one")

		if _as_utc(challenge.expires_at) < _utcnow():
			challenge.consumed = True
			await self.db.commit()
			raise OtpServiceError("Verification code expired, request a new one")

		if challenge.attempts >= self.settings.otp_max_attempts:
			challenge.consumed = True
			await self.db.commit()
			raise OtpServiceError("Too many attempts, request a new code", status.HTTP_429_TOO_MANY_REQUESTS)

		challenge.attempts += 1
		if not hmac.compare_digest(challenge.code_hash, hash_code(code)):
			await self.db.commit()
			raise OtpServiceError("Invalid verification code")

		challenge.consumed = True
		student = await self._get_or_create_student(phone)
		student.last_login_at = _utcnow()
		await self.db.commit()
		await self.db.refresh(student)

		latest = await self._latest_registration(student.id)
		returning = latest is not None
		if redirect_to is None:
			redirect_to = RETURNING_REDIRECT if returning else DEFAULT_REDIRECT
		return StudentLogin(
			student=student,
			returning=returning,
			welcome_name=latest.name if latest else None,
			redirect_to=redirect_to,
		)

	async def _find_student(self, phone: str) -> Student | None:
		result = await self.db.execute(select(Student).where(Student.phone == phone))
		return result.scalar_one_or_none()

	async def _get_or_create_student(self, phone: str) -> Student:
		student = await self._find_student(phone)
		if student is not None:
			return student
		student = Student(phone=phone)
		try:
			# Savepoint: losing the race must not undo the consumed challenge
			async with self.db.begin_nested():
				self.db.add(student)
		except IntegrityError:
			existing = await self._find_student(phone)
			if existing is None:
				raise
			return existing
		logger.info("Created student %s", student.id)
		return student

	async def _latest_registration(self, student_id: str) -> Registration | None:
		result = await self.db.execute(
			select(Registration)
			.where(Registration.student_id == student_id)
			.order_by(Registration.registered_at.desc())
			.limit(1)
		)
		return result.scalar_one_or_none()
