from datetime import datetime, timedelta, timezone

from fastapi import Depends, HTTPException, status
from jose import jwt
from passlib.context import CryptContext

from common import CurrentUser, make_get_current_user, make_require_role

from .config import get_settings

ROLE_ADMIN = "admin"
ROLE_STUDENT = "student"

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
	return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
	return pwd_context.hash(password)


def _now() -> datetime:
	return datetime.now(timezone.utc)


def create_access_token(subject: str, *, role: str, extra_claims: dict | None = None) -> str:
	settings = get_settings()
	expire = _now() + timedelta(minutes=settings.access_token_expire_minutes)
	payload = {"sub": subject, "role": role, "type": "access", "exp": int(expire.timestamp())}
	if extra_claims:
		payload |= extra_claims
	return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


get_current_user = make_get_current_user(get_settings)
get_current_student = make_require_role(get_current_user, ROLE_STUDENT)
_require_admin_role = make_require_role(get_current_user, ROLE_ADMIN)


async def get_current_admin(current_user: CurrentUser = Depends(_require_admin_role)) -> CurrentUser:
	# Admin sessions come from email/password logins only
	if not current_user.email:
		raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Verified admin email required")
	return current_user
