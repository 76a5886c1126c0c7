from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from ..database import Base

BUNDLE_COURSE_ID = "bundle"


class Course(Base):
	__tablename__ = "courses"

	# Lower-cased course code; immutable once created
	id: Mapped[str] = mapped_column(String(64), primary_key=True)
	code: Mapped[str] = mapped_column(String(64), nullable=False)
	name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
	description: Mapped[str] = mapped_column(Text, nullable=False, default="")
	instructor: Mapped[str] = mapped_column(String(255), nullable=False, default="")
	base_price: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
	early_bird_price: Mapped[int | None] = mapped_column(Integer, nullable=True)
	special_offer_price: Mapped[int | None] = mapped_column(Integer, nullable=True)
	early_bird_slots: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
	total_slots: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
	thumbnail: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
	whatsapp_link: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
	highlights: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
	offer_text: Mapped[str | None] = mapped_column(Text, nullable=True)
	created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
	updated_at: Mapped[datetime] = mapped_column(
		DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
	)
