from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from src.domain.value_objects.bond_status import BondStatus
from src.domain.value_objects.tax_class import TaxClass
from src.domain.value_objects.transaction_type import TransactionType


@dataclass(slots=True)
class TTBTransaction:
    id: UUID
    tenant_id: UUID
    transaction_type: TransactionType
    tax_class: TaxClass
    volume_gallons: Decimal
    transaction_date: date
    lot_id: UUID | None = None
    container_id: UUID | None = None
    bottling_run_id: UUID | None = None
    bond_status: BondStatus | None = None
    source_event_type: str | None = None
    source_event_id: UUID | None = None
    notes: str | None = None
    created_by: UUID | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        *,
        tenant_id: UUID,
        transaction_type: TransactionType,
        tax_class: TaxClass,
        volume_gallons: Decimal,
        transaction_date: date | None = None,
        lot_id: UUID | None = None,
        container_id: UUID | None = None,
        bottling_run_id: UUID | None = None,
        bond_status: BondStatus | None = None,
        source_event_type: str | None = None,
        source_event_id: UUID | None = None,
        notes: str | None = None,
        created_by: UUID | None = None,
    ) -> TTBTransaction:
        if volume_gallons <= 0:
            raise ValueError("volume_gallons must be positive")
        return cls(
            id=uuid4(),
            tenant_id=tenant_id,
            transaction_type=transaction_type,
            tax_class=tax_class,
            volume_gallons=volume_gallons,
            transaction_date=transaction_date or datetime.now(timezone.utc).date(),
            lot_id=lot_id,
            container_id=container_id,
            bottling_run_id=bottling_run_id,
            bond_status=bond_status,
            source_event_type=source_event_type,
            source_event_id=source_event_id,
            notes=notes,
            created_by=created_by,
            created_at=datetime.now(timezone.utc),
        )
