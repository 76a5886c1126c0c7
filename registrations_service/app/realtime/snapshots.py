"""Snapshot messages pushed to live subscribers after each mutation."""
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from ..schemas import RegistrationOut
from ..services import CourseService, RegistrationService, build_course_out
from .manager import ADMIN_REGISTRATIONS_CHANNEL, COURSES_CHANNEL, ws_manager


async def courses_snapshot(db: AsyncSession) -> dict:
	courses = await CourseService(db).list_courses()
	return {
		"type": "courses",
		"items": [build_course_out(course).model_dump(mode="json") for course in courses],
	}


async def registrations_snapshot(service: RegistrationService) -> dict:
	registrations = await service.list_registrations()
	return {
		"type": "registrations",
		"items": [RegistrationOut.model_validate(item).model_dump(mode="json") for item in registrations],
	}


async def publish_courses(db: AsyncSession) -> None:
	if not ws_manager.has_subscribers(COURSES_CHANNEL):
		return
	await ws_manager.broadcast(COURSES_CHANNEL, await courses_snapshot(db))


async def publish_registrations(service: RegistrationService) -> None:
	if not ws_manager.has_subscribers(ADMIN_REGISTRATIONS_CHANNEL):
		return
	await ws_manager.broadcast(ADMIN_REGISTRATIONS_CHANNEL, await registrations_snapshot(service))
