"""Базовый класс настроек, общий для сервисов."""
from functools import lru_cache
from typing import Callable

from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseServiceSettings(BaseSettings):
	"""Настройки, нужные каждому сервису: база данных, JWT и метрики."""

	app_name: str
	database_url: str
	database_url_async: str | None = None
	jwt_secret: str
	jwt_algorithm: str = "HS256"
	metrics_enabled: bool = True
	log_level: str = "INFO"

	# Пул соединений (для SQLite не используется)
	db_pool_size: int = 10
	db_max_overflow: int = 20
	db_pool_timeout: int = 30
	db_pool_recycle: int = 1800

	model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")


def make_get_settings(settings_class: type[BaseServiceSettings]) -> Callable:
	"""
	Создает кэшируемую функцию ``get_settings`` для конкретного класса настроек.

	Args:
		settings_class: Наследник BaseServiceSettings

	Returns:
		Функция без аргументов, всегда возвращающая один и тот же объект настроек
	"""
	@lru_cache
	def get_settings() -> BaseServiceSettings:
		return settings_class()

	return get_settings
