from __future__ import annotations

from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy import Boolean, DateTime, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from ..database import Base


class PaymentOption(str, PyEnum):
	FULL = "full"
	SEAT_LOCK = "seat_lock"


class PaymentStatus(str, PyEnum):
	FULL_PAYMENT_PENDING = "full_payment_pending"
	SEAT_LOCK_PENDING = "seat_lock_pending"


class Registration(Base):
	__tablename__ = "registrations"
	__table_args__ = (
		UniqueConstraint("student_id", "course_id", name="uq_registrations_student_course"),
	)

	# "{student_id}_{course_id}"
	id: Mapped[str] = mapped_column(String(160), primary_key=True)
	student_id: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
	# course id or the "bundle" sentinel, so no foreign key
	course_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
	course_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
	name: Mapped[str] = mapped_column(String(255), nullable=False)
	email: Mapped[str] = mapped_column(String(255), nullable=False)
	phone: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
	college: Mapped[str] = mapped_column(String(255), nullable=False)
	screenshot_url: Mapped[str] = mapped_column(String(1024), nullable=False)
	price_offered: Mapped[int] = mapped_column(Integer, nullable=False)
	amount_paid: Mapped[int] = mapped_column(Integer, nullable=False)
	payment_option: Mapped[str] = mapped_column(String(16), nullable=False)
	payment_status: Mapped[str] = mapped_column(String(32), nullable=False)
	confirmed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
	confirmed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
	registered_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
