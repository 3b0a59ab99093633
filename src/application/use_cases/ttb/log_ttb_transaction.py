"""Ledger entries produced by production events.

Entries are keyed on ``(source_event_type, source_event_id)``: logging the same event
twice returns the entry recorded the first time instead of double counting gallons.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.ttb_transaction import TTBTransaction
from src.domain.value_objects.bond_status import BondStatus
from src.domain.value_objects.tax_class import TaxClass
from src.domain.value_objects.transaction_type import TransactionType

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class LogTTBTransactionInput:
    source_event_type: str
    source_event_id: UUID
    transaction_type: TransactionType
    tax_class: TaxClass
    volume_gallons: Decimal
    lot_id: UUID | None = None
    container_id: UUID | None = None
    bottling_run_id: UUID | None = None
    bond_status: BondStatus | None = None
    transaction_date: date | None = None
    notes: str | None = None


@dataclass(slots=True)
class LoggedTransaction:
    transaction: TTBTransaction
    created: bool


async def record(
    uow: UnitOfWork,
    tenant_id: UUID,
    payload: LogTTBTransactionInput,
    *,
    actor_user_id: UUID | None = None,
) -> LoggedTransaction:
    """Add the entry to the current unit of work without committing."""
    if not payload.source_event_type:
        raise ValidationError("source_event_type is required")
    existing = await uow.ttb_transactions.get_by_source_event(
        tenant_id, payload.source_event_type, payload.source_event_id
    )
    if existing:
        logger.info(
            "TTB transaction already logged for %s %s",
            payload.source_event_type,
            payload.source_event_id,
        )
        return LoggedTransaction(transaction=existing, created=False)
    try:
        tx = TTBTransaction.create(
            tenant_id=tenant_id,
            transaction_type=payload.transaction_type,
            tax_class=payload.tax_class,
            volume_gallons=payload.volume_gallons,
            transaction_date=payload.transaction_date,
            lot_id=payload.lot_id,
            container_id=payload.container_id,
            bottling_run_id=payload.bottling_run_id,
            bond_status=payload.bond_status,
            source_event_type=payload.source_event_type,
            source_event_id=payload.source_event_id,
            notes=payload.notes,
            created_by=actor_user_id,
        )
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    created = await uow.ttb_transactions.add(tx)
    return LoggedTransaction(transaction=created, created=True)


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    actor_user_id: UUID | None,
    payload: LogTTBTransactionInput,
) -> LoggedTransaction:
    result = await record(uow, tenant_id, payload, actor_user_id=actor_user_id)
    if result.created:
        await uow.commit()
    return result
