from common import BaseServiceSettings, make_get_settings


class Settings(BaseServiceSettings):
	app_name: str = "Course Registrations API"
	access_token_expire_minutes: int = 60 * 24
	run_migrations: bool = True

	# Admin account created on startup when both are set
	admin_email: str | None = None
	admin_password: str | None = None

	# Student phone login
	phone_country_code: str = "+91"
	otp_ttl_seconds: int = 300
	otp_max_attempts: int = 5
	otp_dev_mode: bool = False
	sms_gateway_url: str | None = None
	sms_gateway_token: str | None = None

	# Payments are made out of band over UPI; students upload a screenshot as proof
	upi_id: str | None = None
	seat_lock_amount: int = 99
	bundle_name: str = "Combined Course Bundle"
	bundle_base_price: int = 3999
	bundle_offer_price: int = 2499
	bundle_offer_slots: int = 10

	# Object storage (MinIO / S3) for payment screenshots
	s3_endpoint: str | None = None
	s3_region: str | None = None
	s3_access_key: str | None = None
	s3_secret_key: str | None = None
	s3_use_ssl: bool = False
	s3_bucket_screenshots: str = "screenshots"
	s3_public_url: str | None = None  # e.g. https://cdn.example.com
	max_screenshot_bytes: int = 10 * 1024 * 1024


get_settings = make_get_settings(Settings)
