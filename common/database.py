"""Общий модуль для работы с базой данных во всех сервисах."""
from collections.abc import AsyncIterator
from typing import Any, Callable

from sqlalchemy import create_engine, pool
from sqlalchemy.engine import Engine
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
	"""Базовый класс для всех моделей SQLAlchemy."""
	pass


def is_sqlite_url(database_url: str) -> bool:
	return database_url.startswith("sqlite")


def resolve_async_url(database_url: str, database_url_async: str | None) -> str:
	"""
	Преобразует синхронный URL базы данных в асинхронный.

	Args:
		database_url: Синхронный URL базы данных (psycopg / pysqlite)
		database_url_async: Опциональный асинхронный URL (если задан, используется он)

	Returns:
		Асинхронный URL базы данных

	Raises:
		ValueError: Если не удалось определить async URL
	"""
	if database_url_async:
		return database_url_async
	if "+asyncpg" in database_url or "+aiosqlite" in database_url:
		return database_url
	replacements = [
		("+psycopg2", "+asyncpg"),
		("+psycopg", "+asyncpg"),
		("postgresql://", "postgresql+asyncpg://"),
		("postgres://", "postgresql+asyncpg://"),
		("sqlite+pysqlite://", "sqlite+aiosqlite://"),
		("sqlite://", "sqlite+aiosqlite://"),
	]
	for needle, replacement in replacements:
		if needle in database_url:
			return database_url.replace(needle, replacement, 1)
	raise ValueError(
		"Cannot derive an async database URL: set database_url_async or use PostgreSQL/SQLite"
	)


def resolve_sync_url(database_url: str) -> str:
	"""Обратное преобразование к resolve_async_url, нужно синхронному Alembic."""
	replacements = [
		("+asyncpg", "+psycopg2"),
		("+aiosqlite", ""),
	]
	for needle, replacement in replacements:
		if needle in database_url:
			return database_url.replace(needle, replacement, 1)
	return database_url


def _engine_options(database_url: str, settings: Any) -> dict[str, Any]:
	if is_sqlite_url(database_url):
		# Соединения SQLite нельзя делить между event loop
		return {"poolclass": pool.NullPool}
	return {
		"pool_pre_ping": True,
		"pool_size": settings.db_pool_size,
		"max_overflow": settings.db_max_overflow,
		"pool_timeout": settings.db_pool_timeout,
		"pool_recycle": settings.db_pool_recycle,
	}


def create_database_engines(
	get_settings: Callable,
) -> tuple[Engine, AsyncEngine, async_sessionmaker]:
	"""
	Создает синхронный движок (миграции), асинхронный движок (запросы) и фабрику сессий.

	Args:
		get_settings: Функция, возвращающая настройки с database_url, database_url_async и
			параметрами db_pool_*

	Returns:
		(sync_engine, async_engine, SessionLocal)
	"""
	settings = get_settings()

	sync_url = resolve_sync_url(settings.database_url)
	async_url = resolve_async_url(settings.database_url, settings.database_url_async)

	sync_engine = create_engine(sync_url, **_engine_options(sync_url, settings))
	async_engine = create_async_engine(async_url, **_engine_options(async_url, settings))

	SessionLocal = async_sessionmaker(
		async_engine,
		expire_on_commit=False,
		autoflush=False,
		class_=AsyncSession,
	)

	return sync_engine, async_engine, SessionLocal


def make_get_db(SessionLocal: async_sessionmaker) -> Callable:
	"""Создает FastAPI-зависимость ``get_db`` для фабрики сессий."""
	async def get_db() -> AsyncIterator[AsyncSession]:
		async with SessionLocal() as session:
			yield session

	return get_db
