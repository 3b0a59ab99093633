from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from src.application.errors import NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.ttb_transaction import TTBTransaction
from src.domain.value_objects.bond_status import BondStatus
from src.domain.value_objects.tax_class import TaxClass
from src.domain.value_objects.transaction_type import TransactionType


@dataclass(slots=True)
class UpdateTransactionInput:
    transaction_type: TransactionType | None = None
    tax_class: TaxClass | None = None
    volume_gallons: Decimal | None = None
    transaction_date: date | None = None
    bond_status: BondStatus | None = None
    notes: str | None = None


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    transaction_id: UUID,
    payload: UpdateTransactionInput,
) -> TTBTransaction:
    if payload.volume_gallons is not None and payload.volume_gallons <= 0:
        raise ValidationError("volume_gallons must be positive")
    existing = await uow.ttb_transactions.get(tenant_id, transaction_id)
    if not existing:
        raise NotFound("Transaction not found")
    data: dict = {}
    for field_name in (
        "transaction_type",
        "tax_class",
        "volume_gallons",
        "transaction_date",
        "bond_status",
        "notes",
    ):
        value = getattr(payload, field_name)
        if value is not None:
            data[field_name] = value
    if not data:
        return existing
    updated = await uow.ttb_transactions.update(tenant_id, transaction_id, data)
    if not updated:
        raise NotFound("Transaction not found")
    await uow.commit()
    return updated
