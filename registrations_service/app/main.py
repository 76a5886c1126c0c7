import logging

from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select

from common import configure_observability

from .config import get_settings
from .database import SessionLocal, get_db
from .migrations_runner import run_migrations
from .models import AdminUser
from .routers import admin, auth, courses, realtime, registrations, suggestions, uploads
from .security import get_password_hash
from .storage import StorageNotConfiguredError, get_storage_service


settings = get_settings()

logging.basicConfig(
	level=settings.log_level.upper(),
	format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title=settings.app_name)


async def check_storage(_db) -> None:
	# Storage is optional until the first upload; only a configured bucket is probed
	try:
		storage = get_storage_service()
	except StorageNotConfiguredError:
		return
	if not await run_in_threadpool(storage.bucket_exists):
		raise RuntimeError(f"Bucket '{storage.bucket}' does not exist")


async def ensure_admin_user() -> None:
	if not settings.admin_email or not settings.admin_password:
		return
	email = settings.admin_email.lower()
	async with SessionLocal() as db:
		result = await db.execute(select(AdminUser).where(AdminUser.email == email))
		if result.scalar_one_or_none() is not None:
			return
		db.add(AdminUser(email=email, hashed_password=get_password_hash(settings.admin_password)))
		await db.commit()
	logger.info("Created admin account %s", email)


@app.on_event("startup")
async def run_startup_tasks() -> None:
	if settings.run_migrations:
		run_migrations()
	await ensure_admin_user()


configure_observability(
	app,
	settings=settings,
	get_db=get_db,
	extra_checks={"storage": check_storage},
)

app.include_router(auth.router)
app.include_router(courses.router)
app.include_router(registrations.router)
app.include_router(admin.router)
app.include_router(suggestions.router)
app.include_router(uploads.router)
app.include_router(realtime.router)
