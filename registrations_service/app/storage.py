from __future__ import annotations

import io
import json
import mimetypes
from functools import lru_cache
from typing import Callable
from uuid import uuid4

from minio import Minio
from minio.error import S3Error

from .config import get_settings

SCREENSHOT_PREFIX = "screenshots"
_IMAGE_EXTENSIONS = {
	"image/jpeg": ".jpg",
	"image/png": ".png",
	"image/webp": ".webp",
	"image/gif": ".gif",
	"image/heic": ".heic",
}


class StorageNotConfiguredError(RuntimeError):
	"""Raised when object storage credentials are missing."""


class StorageBucketError(RuntimeError):
	"""Raised when working with S3 buckets fails."""


class StorageUploadError(RuntimeError):
	"""Raised when an object cannot be written."""


class InvalidUploadError(ValueError):
	"""Raised for uploads that are not acceptable images."""


def _public_read_policy(bucket: str) -> str:
	return json.dumps(
		{
			"Version": "2012-10-17",
			"Statement": [
				{
					"Effect": "Allow",
					"Principal": {"AWS": ["*"]},
					"Action": ["s3:GetObject"],
					"Resource": [f"arn:aws:s3:::{bucket}/*"],
				}
			],
		}
	)


def check_image(data: bytes, content_type: str | None, *, max_bytes: int) -> None:
	if not data:
		raise InvalidUploadError("Uploaded file is empty")
	if not content_type or not content_type.startswith("image/"):
		raise InvalidUploadError("Only image uploads are accepted")
	if len(data) > max_bytes:
		raise InvalidUploadError(f"Image is larger than {max_bytes // (1024 * 1024)} MB")


def screenshot_object_name(owner_id: str, content_type: str) -> str:
	extension = _IMAGE_EXTENSIONS.get(content_type) or mimetypes.guess_extension(content_type) or ".jpg"
	return f"{SCREENSHOT_PREFIX}/{owner_id}-{uuid4().hex}{extension}"


class StorageService:
	"""Thin wrapper around MinIO client for publicly readable screenshots."""

	def __init__(self) -> None:
		settings = get_settings()
		if not settings.s3_endpoint or not settings.s3_access_key or not settings.s3_secret_key:
			raise StorageNotConfiguredError("S3 storage is not configured")

		self._client = Minio(
			settings.s3_endpoint,
			access_key=settings.s3_access_key,
			secret_key=settings.s3_secret_key,
			secure=settings.s3_use_ssl,
			region=settings.s3_region,
		)
		self._bucket = settings.s3_bucket_screenshots
		scheme = "https" if settings.s3_use_ssl else "http"
		self._public_base = (settings.s3_public_url or f"{scheme}://{settings.s3_endpoint}").rstrip("/")
		self._bucket_ready = False

	@property
	def client(self) -> Minio:
		return self._client

	@property
	def bucket(self) -> str:
		return self._bucket

	def ensure_public_bucket(self) -> None:
		if self._bucket_ready:
			return
		try:
			if not self._client.bucket_exists(self._bucket):
				self._client.make_bucket(self._bucket)
			self._client.set_bucket_policy(self._bucket, _public_read_policy(self._bucket))
		except S3Error as exc:
			raise StorageBucketError(f"Unable to prepare bucket '{self._bucket}': {exc}") from exc
		self._bucket_ready = True

	def bucket_exists(self) -> bool:
		return self._client.bucket_exists(self._bucket)

	def public_url(self, object_name: str) -> str:
		return f"{self._public_base}/{self._bucket}/{object_name}"

	def upload_image(self, object_name: str, data: bytes, content_type: str) -> str:
		"""Store ``data`` under ``object_name`` and return its public URL."""
		self.ensure_public_bucket()
		try:
			self._client.put_object(
				self._bucket,
				object_name,
				io.BytesIO(data),
				len(data),
				content_type=content_type,
			)
		except S3Error as exc:
			raise StorageUploadError(f"Failed to upload object {object_name}: {exc}") from exc
		return self.public_url(object_name)


@lru_cache(maxsize=1)
def get_storage_service() -> StorageService:
	"""Return a cached storage service instance or raise if not configured."""

	return StorageService()


StorageFactory = Callable[[], StorageService]


def get_storage_factory() -> StorageFactory:
	"""FastAPI dependency; storage is opened lazily so input checks run first."""
	return get_storage_service
