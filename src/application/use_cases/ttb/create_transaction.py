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
class CreateTransactionInput:
    transaction_type: TransactionType
    tax_class: TaxClass
    volume_gallons: Decimal
    transaction_date: date | None = None
    lot_id: UUID | None = None
    container_id: UUID | None = None
    bond_status: BondStatus | None = None
    notes: str | None = None


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    actor_user_id: UUID | None,
    payload: CreateTransactionInput,
) -> TTBTransaction:
    if payload.lot_id and not await uow.lots.get(tenant_id, payload.lot_id):
        raise NotFound("Lot not found")
    try:
        tx = TTBTransaction.create(
            tenant_id=tenant_id,
            transaction_type=payload.transaction_type,
            tax_class=payload.tax_class,
            volume_gallons=payload.volume_gallons,
            transaction_date=payload.transaction_date,
            lot_id=payload.lot_id,
            container_id=payload.container_id,
            bond_status=payload.bond_status,
            notes=payload.notes,
            created_by=actor_user_id,
        )
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    created = await uow.ttb_transactions.add(tx)
    await uow.commit()
    return created
