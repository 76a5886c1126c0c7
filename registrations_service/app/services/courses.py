from __future__ import annotations

from logging import getLogger
from typing import Sequence

from fastapi import status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import BUNDLE_COURSE_ID, Course
from ..schemas import AdminCourseOut, CourseCreate, CourseOut, CourseUpdate
from .pricing import discount_percent, effective_price

logger = getLogger(__name__)

BUNDLE_REGISTER_PATH = "/bundle-register"
# Text columns that a null in an update resets to ""
_BLANKABLE = frozenset({"description", "instructor", "thumbnail", "whatsapp_link"})


class CourseServiceError(Exception):
	def __init__(self, message: str, status_code: int = status.HTTP_400_BAD_REQUEST):
		super().__init__(message)
		self.message = message
		self.status_code = status_code


def course_id_from_code(code: str) -> str:
	code = code.strip()
	if "/" in code:
		raise CourseServiceError("Course code cannot contain '/'")
	if not code:
		raise CourseServiceError("Course code is required")
	return code.lower()


def register_path(course_id: str) -> str:
	if course_id == BUNDLE_COURSE_ID:
		return BUNDLE_REGISTER_PATH
	return f"/register/{course_id}"


def _check_prices(base_price: int, early_bird_price: int | None, special_offer_price: int | None) -> None:
	if early_bird_price is not None and early_bird_price > base_price:
		raise CourseServiceError("Early bird price cannot exceed the base price")
	if special_offer_price is not None and special_offer_price > base_price:
		raise CourseServiceError("Special offer price cannot exceed the base price")


def _price_fields(course: Course) -> dict:
	price = effective_price(course)
	return {
		"effective_price": price,
		"discount_percent": discount_percent(course.base_price, price),
		"register_path": register_path(course.id),
	}


def _course_columns(course: Course) -> dict:
	return {column.key: getattr(course, column.key) for column in Course.__table__.columns}


def build_course_out(course: Course) -> CourseOut:
	return CourseOut.model_validate({**_course_columns(course), **_price_fields(course)})


def build_admin_course_out(course: Course) -> AdminCourseOut:
	return AdminCourseOut.model_validate({**_course_columns(course), **_price_fields(course)})


class CourseService:
	def __init__(self, db: AsyncSession):
		self.db = db

	async def list_courses(self) -> Sequence[Course]:
		result = await self.db.execute(select(Course).order_by(Course.name, Course.id))
		return result.scalars().all()

	async def get_course(self, course_id: str) -> Course:
		course = await self.db.get(Course, course_id)
		if course is None:
			raise CourseServiceError("Course not found", status.HTTP_404_NOT_FOUND)
		return course

	async def create_course(self, payload: CourseCreate) -> Course:
		course_id = course_id_from_code(payload.course_code)
		_check_prices(payload.base_price, payload.early_bird_price, payload.special_offer_price)
		if await self.db.get(Course, course_id) is not None:
			raise CourseServiceError(
				f"A course with code '{payload.course_code}' already exists",
				status.HTTP_409_CONFLICT,
			)

		data = payload.model_dump(exclude={"course_code"})
		course = Course(id=course_id, code=payload.course_code, **data)
		self.db.add(course)
		try:
			await self.db.commit()
		except IntegrityError as exc:
			await self.db.rollback()
			raise CourseServiceError(
				f"A course with code '{payload.course_code}' already exists",
				status.HTTP_409_CONFLICT,
			) from exc
		await self.db.refresh(course)
		logger.info("Created course %s", course.id)
		return course

	async def update_course(self, course_id: str, payload: CourseUpdate) -> Course:
		course = await self.get_course(course_id)
		changes = payload.model_dump(exclude_unset=True)
		# Nullable prices may be cleared, required columns may not
		for key in ("name", "base_price", "early_bird_slots", "total_slots", "highlights"):
			if key in changes and changes[key] is None:
				raise CourseServiceError(f"'{key}' cannot be null")
		_check_prices(
			changes.get("base_price", course.base_price),
			changes.get("early_bird_price", course.early_bird_price),
			changes.get("special_offer_price", course.special_offer_price),
		)
		for key, value in changes.items():
			setattr(course, key, "" if value is None and key in _BLANKABLE else value)
		await self.db.commit()
		await self.db.refresh(course)
		logger.info("Updated course %s (%s)", course.id, ", ".join(sorted(changes)) or "no changes")
		return course

	async def delete_course(self, course_id: str) -> None:
		course = await self.get_course(course_id)
		await self.db.delete(course)
		await self.db.commit()
		logger.info("Deleted course %s", course_id)
