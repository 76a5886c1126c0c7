from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field, field_validator


class OtpRequest(BaseModel):
	phone: str = Field(pattern=r"^\d{10}$", description="10-digit mobile number without country code")


class OtpRequestOut(BaseModel):
	status: str = "sent"
	expires_in: int
	# Only filled in dev mode, when no SMS gateway is configured
	dev_code: str | None = None


class OtpVerify(BaseModel):
	phone: str = Field(pattern=r"^\d{10}$")
	code: str = Field(pattern=r"^\d{6}$")
	redirect_to: str | None = Field(default=None, max_length=255)

	@field_validator("redirect_to")
	@classmethod
	def check_redirect_to(cls, value: str | None) -> str | None:
		if value is None:
			return None
		if not value.startswith("/") or value.startswith("//"):
			raise ValueError("redirect_to must be a path on this site")
		return value


class StudentToken(BaseModel):
	access_token: str
	token_type: str = "bearer"
	student_id: str
	returning: bool
	welcome_name: str | None = None
	redirect_to: str


class AdminLogin(BaseModel):
	email: EmailStr
	password: str = Field(min_length=1)


class Token(BaseModel):
	access_token: str
	token_type: str = "bearer"


class SessionOut(BaseModel):
	id: str
	role: str
	email: str | None = None
	phone: str | None = None
