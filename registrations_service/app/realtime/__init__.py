from .manager import (
	ADMIN_REGISTRATIONS_CHANNEL,
	COURSES_CHANNEL,
	ConnectionInfo,
	ConnectionManager,
	ws_manager,
)
from .snapshots import (
	courses_snapshot,
	publish_courses,
	publish_registrations,
	registrations_snapshot,
)

__all__ = [
	"ADMIN_REGISTRATIONS_CHANNEL",
	"COURSES_CHANNEL",
	"ConnectionInfo",
	"ConnectionManager",
	"ws_manager",
	"courses_snapshot",
	"publish_courses",
	"publish_registrations",
	"registrations_snapshot",
]
