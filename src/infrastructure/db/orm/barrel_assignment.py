from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class BarrelAssignmentORM(Base):
    __tablename__ = "barrel_assignments"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    lot_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("production_lots.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    barrel_name: Mapped[str] = mapped_column(String(255), nullable=False)
    assigned_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
