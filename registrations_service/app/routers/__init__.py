from . import admin, auth, courses, realtime, registrations, suggestions, uploads

__all__ = ["admin", "auth", "courses", "realtime", "registrations", "suggestions", "uploads"]
