from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clean_highlights(value: list[str] | None) -> list[str] | None:
	if value is None:
		return None
	return [item.strip() for item in value if item and item.strip()]


class CourseCreate(BaseModel):
	model_config = ConfigDict(str_strip_whitespace=True)

	course_code: str = Field(min_length=1, max_length=64)
	name: str = Field(min_length=1, max_length=255)
	description: str = ""
	instructor: str = ""
	base_price: int = Field(ge=0)
	early_bird_price: int | None = Field(default=None, ge=0)
	special_offer_price: int | None = Field(default=None, ge=0)
	early_bird_slots: int = Field(default=0, ge=0)
	total_slots: int = Field(default=0, ge=0)
	thumbnail: str = ""
	whatsapp_link: str = ""
	highlights: list[str] = Field(default_factory=list)
	offer_text: str | None = None

	@field_validator("highlights")
	@classmethod
	def clean_highlights(cls, value: list[str] | None) -> list[str] | None:
		return _clean_highlights(value)


class CourseUpdate(BaseModel):
	"""Merge update: only the fields sent are changed. The course id cannot be changed."""

	model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

	name: str | None = Field(default=None, min_length=1, max_length=255)
	description: str | None = None
	instructor: str | None = None
	base_price: int | None = Field(default=None, ge=0)
	early_bird_price: int | None = Field(default=None, ge=0)
	special_offer_price: int | None = Field(default=None, ge=0)
	early_bird_slots: int | None = Field(default=None, ge=0)
	total_slots: int | None = Field(default=None, ge=0)
	thumbnail: str | None = None
	whatsapp_link: str | None = None
	highlights: list[str] | None = None
	offer_text: str | None = None

	@field_validator("highlights")
	@classmethod
	def clean_highlights(cls, value: list[str] | None) -> list[str] | None:
		return _clean_highlights(value)


class CourseOut(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: str
	code: str
	name: str
	description: str
	instructor: str
	base_price: int
	early_bird_price: int | None = None
	special_offer_price: int | None = None
	early_bird_slots: int
	total_slots: int
	thumbnail: str
	highlights: list[str]
	offer_text: str | None = None
	effective_price: int
	discount_percent: int
	register_path: str
	created_at: datetime
	updated_at: datetime


class AdminCourseOut(CourseOut):
	whatsapp_link: str
