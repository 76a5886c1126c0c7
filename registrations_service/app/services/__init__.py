from .courses import (
	CourseService,
	CourseServiceError,
	build_admin_course_out,
	build_course_out,
	register_path,
)
from .otp import OtpService, OtpServiceError
from .registrations import (
	RegistrationService,
	RegistrationServiceError,
	Screenshot,
	build_student_registration_out,
	decode_base64_image,
	upload_screenshot,
)

__all__ = [
	"CourseService",
	"CourseServiceError",
	"build_admin_course_out",
	"build_course_out",
	"register_path",
	"OtpService",
	"OtpServiceError",
	"RegistrationService",
	"RegistrationServiceError",
	"Screenshot",
	"build_student_registration_out",
	"decode_base64_image",
	"upload_screenshot",
]
