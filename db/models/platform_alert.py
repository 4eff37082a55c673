"""
db/models/platform_alert.py

Alerts raised from scrape outcomes (failures, empty or low listing counts).
"""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, TimestampMixin


class PlatformAlert(Base, TimestampMixin):
    __tablename__ = "platform_alerts"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )
    platform_name: Mapped[str] = mapped_column(String(120), nullable=False)
    scrape_log_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("scrape_logs.id", ondelete="SET NULL"),
        nullable=True,
    )
    alert_type: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="no_listings, low_listings, scrape_failure, selector_broken",
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    resolved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    resolved_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    __table_args__ = (
        Index("ix_platform_alerts_platform_name", "platform_name"),
        Index("ix_platform_alerts_resolved", "resolved"),
    )
