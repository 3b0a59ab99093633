from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import (
    DECIMAL,
    Date,
    DateTime,
    ForeignKey,
    String,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from src.domain.value_objects.bond_status import BondStatus
from src.domain.value_objects.tax_class import TaxClass
from src.domain.value_objects.transaction_type import TransactionType
from src.infrastructure.db.base import Base, value_enum


class TTBTransactionORM(Base):
    __tablename__ = "ttb_transactions"
    __table_args__ = (
        UniqueConstraint(
            "tenant_id",
            "source_event_type",
            "source_event_id",
            name="uq_ttb_transactions_source_event",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    tenant_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    transaction_type: Mapped[TransactionType] = mapped_column(
        value_enum(TransactionType, length=48), nullable=False, index=True
    )
    tax_class: Mapped[TaxClass] = mapped_column(value_enum(TaxClass), nullable=False, index=True)
    volume_gallons: Mapped[Decimal] = mapped_column(DECIMAL(12, 3), nullable=False)
    transaction_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    lot_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("production_lots.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    container_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    bottling_run_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    bond_status: Mapped[BondStatus | None] = mapped_column(value_enum(BondStatus), nullable=True)
    source_event_type: Mapped[str | None] = mapped_column(String(64), nullable=True)
    source_event_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    notes: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    created_by: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
