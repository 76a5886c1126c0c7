from .admin import AdminUser
from .course import BUNDLE_COURSE_ID, Course
from .registration import PaymentOption, PaymentStatus, Registration
from .student import OtpChallenge, Student
from .suggestion import Suggestion

__all__ = [
	"AdminUser",
	"BUNDLE_COURSE_ID",
	"Course",
	"OtpChallenge",
	"PaymentOption",
	"PaymentStatus",
	"Registration",
	"Student",
	"Suggestion",
]
