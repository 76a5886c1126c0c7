import asyncio
import os
import tempfile
from pathlib import Path

import pytest

_TMP_DIR = Path(tempfile.mkdtemp(prefix="registrations-tests-"))

# Settings are read once and cached, so the environment must be ready before the app is imported
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'test.db'}"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["RUN_MIGRATIONS"] = "false"
os.environ["METRICS_ENABLED"] = "false"
os.environ["OTP_DEV_MODE"] = "true"
os.environ["ADMIN_EMAIL"] = "admin@example.com"
os.environ["ADMIN_PASSWORD"] = "admin-password"
os.environ["UPI_ID"] = "courses@upi"
for _name in ("S3_ENDPOINT", "S3_ACCESS_KEY", "S3_SECRET_KEY", "SMS_GATEWAY_URL", "DATABASE_URL_ASYNC"):
	os.environ.pop(_name, None)

from fastapi.testclient import TestClient  # noqa: E402

from registrations_service.app.database import Base, async_engine  # noqa: E402
from registrations_service.app.main import app  # noqa: E402
from registrations_service.app.storage import StorageUploadError, get_storage_factory  # noqa: E402

ADMIN_EMAIL = os.environ["ADMIN_EMAIL"]
ADMIN_PASSWORD = os.environ["ADMIN_PASSWORD"]
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class FakeStorage:
	"""In-memory stand-in for the MinIO-backed storage service."""

	def __init__(self) -> None:
		self.objects: dict[str, tuple[bytes, str]] = {}
		self.fail = False

	def upload_image(self, object_name: str, data: bytes, content_type: str) -> str:
		if self.fail:
			raise StorageUploadError("bucket unavailable")
		self.objects[object_name] = (data, content_type)
		return f"http://storage.test/screenshots/{object_name}"


async def _reset_database() -> None:
	async with async_engine.begin() as conn:
		await conn.run_sync(Base.metadata.drop_all)
		await conn.run_sync(Base.metadata.create_all)


@pytest.fixture
def storage() -> FakeStorage:
	return FakeStorage()


@pytest.fixture
def client(storage):
	asyncio.run(_reset_database())
	app.dependency_overrides[get_storage_factory] = lambda: (lambda: storage)
	with TestClient(app) as test_client:
		yield test_client
	app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client) -> dict[str, str]:
	response = client.post(
		"/api/auth/admin/login",
		json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD},
	)
	assert response.status_code == 200, response.text
	return {"Authorization": f"Bearer {response.json()['access_token']}"}


def login_student(client, phone: str, **extra) -> dict:
	issued = client.post("/api/auth/student/otp", json={"phone": phone})
	assert issued.status_code == 200, issued.text
	response = client.post(
		"/api/auth/student/verify",
		json={"phone": phone, "code": issued.json()["dev_code"], **extra},
	)
	assert response.status_code == 200, response.text
	return response.json()


@pytest.fixture
def student_login(client):
	"""Log a student in by phone; returns (headers, token payload)."""

	def _login(phone: str = "9876543210", **extra) -> tuple[dict[str, str], dict]:
		payload = login_student(client, phone, **extra)
		return {"Authorization": f"Bearer {payload['access_token']}"}, payload

	return _login


@pytest.fixture
def create_course(client, admin_headers):
	def _create(**overrides) -> dict:
		body = {
			"course_code": "UCM",
			"name": "Unified Communication Masterclass",
			"description": "Hands-on course",
			"instructor": "A. Trainer",
			"base_price": 1999,
			"early_bird_price": 1499,
			"whatsapp_link": "https://chat.whatsapp.com/ucm",
			"highlights": ["Live sessions", "Certificate"],
		}
		body.update(overrides)
		response = client.post("/api/courses", json=body, headers=admin_headers)
		assert response.status_code == 201, response.text
		return response.json()

	return _create


def registration_form(**overrides) -> dict[str, str]:
	form = {
		"name": "Asha Kumar",
		"email": "asha@example.com",
		"college": "City College",
		"payment_option": "full",
	}
	form.update(overrides)
	return form


def screenshot_file(content: bytes = PNG_BYTES, content_type: str = "image/png") -> dict:
	return {"screenshot": ("payment.png", content, content_type)}
