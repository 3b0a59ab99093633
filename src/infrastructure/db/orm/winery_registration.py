from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.db.base import Base


class WineryRegistrationORM(Base):
    __tablename__ = "winery_registrations"

    tenant_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    operated_by: Mapped[str] = mapped_column(String(255), nullable=False)
    trade_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    ein: Mapped[str] = mapped_column(String(16), nullable=False)
    registry_number: Mapped[str] = mapped_column(String(32), nullable=False)
    premises_address: Mapped[str] = mapped_column(String(255), nullable=False)
    premises_city: Mapped[str] = mapped_column(String(128), nullable=False)
    premises_state: Mapped[str] = mapped_column(String(2), nullable=False)
    premises_zip: Mapped[str] = mapped_column(String(10), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
