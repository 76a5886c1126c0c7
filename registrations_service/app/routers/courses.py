from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from common import CurrentUser

from ..database import get_db
from ..realtime import publish_courses
from ..schemas import AdminCourseOut, CourseCreate, CourseOut, CourseUpdate
from ..security import get_current_admin
from ..services import (
	CourseService,
	CourseServiceError,
	build_admin_course_out,
	build_course_out,
)

router = APIRouter(prefix="/api/courses", tags=["courses"])


def _handle_error(exc: CourseServiceError) -> HTTPException:
	return HTTPException(status_code=exc.status_code, detail=exc.message)


@router.get("", response_model=list[CourseOut])
async def list_courses(db: AsyncSession = Depends(get_db)) -> list[CourseOut]:
	courses = await CourseService(db).list_courses()
	return [build_course_out(course) for course in courses]


@router.get("/{course_id}", response_model=CourseOut)
async def get_course(course_id: str, db: AsyncSession = Depends(get_db)) -> CourseOut:
	try:
		course = await CourseService(db).get_course(course_id)
	except CourseServiceError as exc:
		raise _handle_error(exc)
	return build_course_out(course)


@router.post("", response_model=AdminCourseOut, status_code=status.HTTP_201_CREATED)
async def create_course(
	payload: CourseCreate,
	_: CurrentUser = Depends(get_current_admin),
	db: AsyncSession = Depends(get_db),
) -> AdminCourseOut:
	try:
		course = await CourseService(db).create_course(payload)
	except CourseServiceError as exc:
		raise _handle_error(exc)
	course_out = build_admin_course_out(course)
	await publish_courses(db)
	return course_out


@router.patch("/{course_id}", response_model=AdminCourseOut)
async def update_course(
	course_id: str,
	payload: CourseUpdate,
	_: CurrentUser = Depends(get_current_admin),
	db: AsyncSession = Depends(get_db),
) -> AdminCourseOut:
	try:
		course = await CourseService(db).update_course(course_id, payload)
	except CourseServiceError as exc:
		raise _handle_error(exc)
	course_out = build_admin_course_out(course)
	await publish_courses(db)
	return course_out


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_course(
	course_id: str,
	_: CurrentUser = Depends(get_current_admin),
	db: AsyncSession = Depends(get_db),
) -> Response:
	try:
		await CourseService(db).delete_course(course_id)
	except CourseServiceError as exc:
		raise _handle_error(exc)
	await publish_courses(db)
	return Response(status_code=status.HTTP_204_NO_CONTENT)
