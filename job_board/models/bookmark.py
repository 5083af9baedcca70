"""Bookmark model — one saved job snapshot per job id."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Bookmark(Base):
    __tablename__ = "bookmarks"

    job_key: Mapped[str] = mapped_column(String(255), primary_key=True)  # str(job.id)
    position: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    payload: Mapped[str] = mapped_column(Text, nullable=False)  # Job.to_dict() as JSON
    bookmarked_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
