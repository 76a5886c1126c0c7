from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from ..database import Base


def _new_id() -> str:
	return uuid4().hex


class Student(Base):
	__tablename__ = "students"

	id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
	phone: Mapped[str] = mapped_column(String(20), unique=True, nullable=False, index=True)
	created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
	last_login_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)


class OtpChallenge(Base):
	__tablename__ = "otp_challenges"

	id: Mapped[int] = mapped_column(Integer, primary_key=True)
	phone: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
	code_hash: Mapped[str] = mapped_column(String(64), nullable=False)
	expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
	attempts: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
	consumed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
	created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
