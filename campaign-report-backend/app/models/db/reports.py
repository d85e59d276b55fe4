"""SQLAlchemy model for stored report documents.

A document is a flat JSON snapshot of one report payload. ``report_name`` is
copied out of the payload so listing does not have to decode every document.
"""
from __future__ import annotations
from datetime import datetime
from typing import Any
from sqlalchemy import String, DateTime, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func
from app.database import Base


class ReportDocument(Base):
    __tablename__ = "report_documents"
    id: Mapped[str] = mapped_column(String(32), primary_key=True)
    project_id: Mapped[str] = mapped_column(String(200), nullable=False)
    collection: Mapped[str] = mapped_column(String(200), nullable=False)
    report_name: Mapped[str | None] = mapped_column(String(500), nullable=True)
    data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("ix_report_documents_scope", "project_id", "collection"),
    )
