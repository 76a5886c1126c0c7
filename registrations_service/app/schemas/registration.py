from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from ..models import PaymentOption


class RegistrationFilter(str, Enum):
	ALL = "all"
	CONFIRMED = "confirmed"
	PENDING = "pending"


class RegistrationDetails(BaseModel):
	"""Contact details submitted with the registration form."""

	model_config = ConfigDict(str_strip_whitespace=True)

	name: str = Field(min_length=1, max_length=255)
	email: EmailStr
	college: str = Field(min_length=1, max_length=255)
	payment_option: PaymentOption = PaymentOption.FULL


class RegistrationOut(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: str
	student_id: str
	course_id: str
	course_name: str
	name: str
	email: str
	phone: str
	college: str
	screenshot_url: str
	price_offered: int
	amount_paid: int
	payment_option: str
	payment_status: str
	confirmed: bool
	confirmed_at: datetime | None = None
	registered_at: datetime


class StudentRegistrationOut(BaseModel):
	id: str
	course_id: str
	course_name: str
	payment_option: str
	payment_status: str
	status_label: str
	confirmed: bool
	price_offered: int
	amount_paid: int
	registered_at: datetime
	# Only revealed once the registration is confirmed
	whatsapp_link: str | None = None


class PaymentInfo(BaseModel):
	upi_id: str | None
	seat_lock_amount: int


class BundlePriceOut(BaseModel):
	course_id: str
	name: str
	price: int
	base_price: int
	discount_percent: int
