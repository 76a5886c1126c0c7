from .auth import (
	AdminLogin,
	OtpRequest,
	OtpRequestOut,
	OtpVerify,
	SessionOut,
	StudentToken,
	Token,
)
from .course import AdminCourseOut, CourseCreate, CourseOut, CourseUpdate
from .registration import (
	BundlePriceOut,
	PaymentInfo,
	RegistrationDetails,
	RegistrationFilter,
	RegistrationOut,
	StudentRegistrationOut,
)
from .suggestion import SuggestionCreate, SuggestionOut
from .upload import ScreenshotUploadIn, ScreenshotUploadOut

__all__ = [
	"AdminCourseOut",
	"AdminLogin",
	"BundlePriceOut",
	"CourseCreate",
	"CourseOut",
	"CourseUpdate",
	"OtpRequest",
	"OtpRequestOut",
	"OtpVerify",
	"PaymentInfo",
	"RegistrationDetails",
	"RegistrationFilter",
	"RegistrationOut",
	"ScreenshotUploadIn",
	"ScreenshotUploadOut",
	"SessionOut",
	"StudentRegistrationOut",
	"StudentToken",
	"SuggestionCreate",
	"SuggestionOut",
	"Token",
]
