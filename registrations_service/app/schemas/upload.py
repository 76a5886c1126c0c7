from __future__ import annotations

from pydantic import BaseModel, Field


class ScreenshotUploadIn(BaseModel):
	file: str = Field(min_length=1, description="Base64-encoded image")
	file_name: str | None = None
	content_type: str = "image/jpeg"


class ScreenshotUploadOut(BaseModel):
	download_url: str
