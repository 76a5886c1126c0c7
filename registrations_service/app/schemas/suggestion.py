from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SuggestionCreate(BaseModel):
	model_config = ConfigDict(str_strip_whitespace=True)

	name: str = Field(min_length=1, max_length=255)
	mobile: str = Field(min_length=1, max_length=20)
	suggestion: str = Field(min_length=1, max_length=5000)


class SuggestionOut(BaseModel):
	model_config = ConfigDict(from_attributes=True)

	id: int
	name: str
	mobile: str
	suggestion: str
	created_at: datetime
