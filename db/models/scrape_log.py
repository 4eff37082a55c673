"""
db/models/scrape_log.py

One persisted scrape outcome per platform run.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base


class ScrapeLog(Base):
    __tablename__ = "scrape_logs"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    platform_name: Mapped[str] = mapped_column(
        String(120),
        nullable=False,
        comment="PlatformConfig.name the outcome belongs to",
    )
    success: Mapped[bool] = mapped_column(Boolean, nullable=False)
    listings_found: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    html_hash: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        default="",
        comment="SHA-256 hex of fetched HTML; empty on failure",
    )
    selector_used: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    response_time_ms: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    fetch_path: Mapped[str | None] = mapped_column(
        String(16),
        nullable=True,
        comment="primary or fallback",
    )
    content_changed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    scraped_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (
        Index("ix_scrape_logs_platform_name", "platform_name"),
        Index("ix_scrape_logs_platform_scraped_at", "platform_name", "scraped_at"),
    )
