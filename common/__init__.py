from .observability import configure_observability
from .database import (
	Base,
	create_database_engines,
	is_sqlite_url,
	make_get_db,
	resolve_async_url,
	resolve_sync_url,
)
from .security import (
	CurrentUser,
	bearer_scheme,
	decode_access_token,
	make_get_current_user,
	make_require_role,
)
from .config import BaseServiceSettings, make_get_settings

__all__ = [
	"configure_observability",
	# Database
	"Base",
	"create_database_engines",
	"is_sqlite_url",
	"make_get_db",
	"resolve_async_url",
	"resolve_sync_url",
	# Security
	"CurrentUser",
	"bearer_scheme",
	"decode_access_token",
	"make_get_current_user",
	"make_require_role",
	# Config
	"BaseServiceSettings",
	"make_get_settings",
]
