from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import get_settings
from ..database import get_db
from ..models import Suggestion
from ..realtime import publish_registrations
from ..schemas import AdminCourseOut, RegistrationFilter, RegistrationOut, SuggestionOut
from ..security import get_current_admin
from ..services import (
	CourseService,
	RegistrationService,
	RegistrationServiceError,
	build_admin_course_out,
)

router = APIRouter(
	prefix="/api/admin",
	tags=["admin"],
	dependencies=[Depends(get_current_admin)],
)


def _handle_error(exc: RegistrationServiceError) -> HTTPException:
	return HTTPException(status_code=exc.status_code, detail=exc.message)


@router.get("/courses", response_model=list[AdminCourseOut])
async def list_admin_courses(db: AsyncSession = Depends(get_db)) -> list[AdminCourseOut]:
	courses = await CourseService(db).list_courses()
	return [build_admin_course_out(course) for course in courses]


@router.get("/registrations", response_model=list[RegistrationOut])
async def list_registrations(
	filter_by: Annotated[RegistrationFilter, Query(alias="filter")] = RegistrationFilter.ALL,
	search: Annotated[str | None, Query(max_length=255)] = None,
	db: AsyncSession = Depends(get_db),
) -> list[RegistrationOut]:
	service = RegistrationService(db, get_settings())
	registrations = await service.list_registrations(filter_by=filter_by, search=search)
	return [RegistrationOut.model_validate(item) for item in registrations]


@router.post("/registrations/{registration_id}/confirm", response_model=RegistrationOut)
async def confirm_registration(
	registration_id: str,
	db: AsyncSession = Depends(get_db),
) -> RegistrationOut:
	service = RegistrationService(db, get_settings())
	try:
		registration = await service.confirm_registration(registration_id)
	except RegistrationServiceError as exc:
		raise _handle_error(exc)
	registration_out = RegistrationOut.model_validate(registration)
	await publish_registrations(service)
	return registration_out


@router.get("/suggestions", response_model=list[SuggestionOut])
async def list_suggestions(
	limit: Annotated[int, Query(ge=1, le=500)] = 200,
	db: AsyncSession = Depends(get_db),
) -> list[SuggestionOut]:
	result = await db.execute(
		select(Suggestion).order_by(Suggestion.created_at.desc(), Suggestion.id.desc()).limit(limit)
	)
	return [SuggestionOut.model_validate(item) for item in result.scalars()]
