from __future__ import annotations

from logging import getLogger
from pathlib import Path

from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from common import resolve_sync_url

from .config import get_settings


logger = getLogger(__name__)

BASELINE_REVISION = "0001"


def get_alembic_config() -> Config:
    # Alembic scripts live next to this module
    base_dir = Path(__file__).resolve().parent

    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(base_dir / "migrations"))
    alembic_cfg.set_main_option("sqlalchemy.url", resolve_sync_url(get_settings().database_url))
    return alembic_cfg


def run_migrations() -> None:
    """Apply pending Alembic migrations at app startup."""
    cfg = get_alembic_config()
    try:
        command.upgrade(cfg, "head")
        logger.info("Alembic migrations applied")
    except Exception as exc:
        # Tables created before Alembic was introduced: stamp the baseline and retry
        engine = create_engine(cfg.get_main_option("sqlalchemy.url"))
        try:
            inspector = inspect(engine)
            if not inspector.has_table("alembic_version") and inspector.has_table("courses"):
                command.stamp(cfg, BASELINE_REVISION)
                command.upgrade(cfg, "head")
                logger.info("Stamped existing schema to %s and upgraded to head", BASELINE_REVISION)
                return
        finally:
            engine.dispose()

        logger.error("Failed to run migrations: %s", exc)
        raise
