from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import DECIMAL, Boolean, DateTime, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from src.domain.value_objects.bond_status import BondStatus
from src.domain.value_objects.lot_status import LotStatus
from src.domain.value_objects.tax_class import TaxClass
from src.domain.value_objects.wine_type import WineType
from src.infrastructure.db.base import Base, value_enum


class ProductionLotORM(Base):
    __tablename__ = "production_lots"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    tenant_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[LotStatus] = mapped_column(value_enum(LotStatus), nullable=False, index=True)
    varietal: Mapped[str | None] = mapped_column(String(255), nullable=True)
    vintage: Mapped[int | None] = mapped_column(Integer, nullable=True)
    wine_type: Mapped[WineType] = mapped_column(value_enum(WineType), nullable=False)
    is_hard_cider: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    current_volume_gallons: Mapped[Decimal] = mapped_column(
        DECIMAL(12, 3), nullable=False, default=Decimal("0")
    )
    current_alcohol_pct: Mapped[Decimal | None] = mapped_column(DECIMAL(5, 2), nullable=True)
    current_ph: Mapped[Decimal | None] = mapped_column(DECIMAL(4, 2), nullable=True)
    current_ta: Mapped[Decimal | None] = mapped_column(DECIMAL(6, 2), nullable=True)
    aging_start_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    fermentation_end_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    container_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    ttb_tax_class: Mapped[TaxClass | None] = mapped_column(value_enum(TaxClass), nullable=True)
    tax_class_rules_version: Mapped[str | None] = mapped_column(String(32), nullable=True)
    bond_status: Mapped[BondStatus] = mapped_column(value_enum(BondStatus), nullable=False)
    archived_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
