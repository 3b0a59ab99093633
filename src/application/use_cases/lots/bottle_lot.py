from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID, uuid4

from src.application.errors import ConflictError, NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.lots.recalculate_tax_class import effective_tax_class
from src.application.use_cases.ttb import log_ttb_transaction
from src.domain.models.production_lot import ProductionLot
from src.domain.models.ttb_transaction import TTBTransaction
from src.domain.services.conversions import bottles_to_gallons
from src.domain.services.eligibility import (
    DEFAULT_BOTTLING_CRITERIA,
    BottlingCriteria,
    get_lot_blockers,
    is_lot_eligible,
)
from src.domain.value_objects.lot_status import LotStatus
from src.domain.value_objects.transaction_type import TransactionType

logger = logging.getLogger(__name__)

BULK_EVENT = "bottling_complete_bulk"
BOTTLED_EVENT = "bottling_complete_bottled"


@dataclass(slots=True)
class BottleLotInput:
    volume_gallons: Decimal | None = None
    bottle_count: int | None = None
    bottle_size_ml: int = 750
    bottling_run_id: UUID | None = None
    bottled_on: date | None = None
    label_name: str | None = None


@dataclass(slots=True)
class BottleLotResult:
    lot: ProductionLot
    bottling_run_id: UUID
    volume_gallons: Decimal
    bulk_transaction: TTBTransaction
    bottled_transaction: TTBTransaction
    already_recorded: bool = False


def _resolve_volume(payload: BottleLotInput) -> Decimal:
    if payload.volume_gallons is not None:
        return Decimal(payload.volume_gallons)
    if payload.bottle_count is not None:
        if payload.bottle_size_ml <= 0:
            raise ValidationError("bottle_size_ml must be positive")
        return bottles_to_gallons(payload.bottle_count, payload.bottle_size_ml)
    raise ValidationError("Provide volume_gallons or bottle_count")


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    actor_user_id: UUID | None,
    lot_id: UUID,
    payload: BottleLotInput,
    *,
    criteria: BottlingCriteria = DEFAULT_BOTTLING_CRITERIA,
) -> BottleLotResult:
    lot = await uow.lots.get(tenant_id, lot_id)
    if not lot:
        raise NotFound("Lot not found")
    if lot.is_archived:
        raise ConflictError("Archived lots cannot be bottled")

    run_id = payload.bottling_run_id or uuid4()
    volume = _resolve_volume(payload)
    if volume <= 0:
        raise ValidationError("Bottled volume must be positive")

    existing = await uow.ttb_transactions.get_by_source_event(tenant_id, BULK_EVENT, run_id)
    if existing is None:
        if not is_lot_eligible(lot, criteria):
            raise ValidationError(
                "Lot is not eligible for bottling",
                details={"blockers": [b.message for b in get_lot_blockers(lot, criteria)]},
            )
        if volume > lot.current_volume_gallons:
            raise ValidationError(
                "Bottled volume exceeds lot volume",
                details={
                    "requested_gallons": str(volume),
                    "available_gallons": str(lot.current_volume_gallons),
                },
            )

    tax_class = effective_tax_class(lot)
    label = payload.label_name or lot.name
    common = dict(
        tax_class=tax_class,
        volume_gallons=volume,
        lot_id=lot.id,
        bottling_run_id=run_id,
        transaction_date=payload.bottled_on,
    )
    bulk = await log_ttb_transaction.record(
        uow,
        tenant_id,
        log_ttb_transaction.LogTTBTransactionInput(
            source_event_type=BULK_EVENT,
            source_event_id=run_id,
            transaction_type=TransactionType.BULK_BOTTLED,
            notes=f"Bottled: {label} {lot.vintage or ''}".rstrip(),
            **common,
        ),
        actor_user_id=actor_user_id,
    )
    bottled = await log_ttb_transaction.record(
        uow,
        tenant_id,
        log_ttb_transaction.LogTTBTransactionInput(
            source_event_type=BOTTLED_EVENT,
            source_event_id=run_id,
            transaction_type=TransactionType.BOTTLED_PRODUCED,
            notes=f"Bottled inventory created: {label}",
            **common,
        ),
        actor_user_id=actor_user_id,
    )
    if not bulk.created:
        await uow.commit()
        return BottleLotResult(
            lot=lot,
            bottling_run_id=run_id,
            volume_gallons=bulk.transaction.volume_gallons,
            bulk_transaction=bulk.transaction,
            bottled_transaction=bottled.transaction,
            already_recorded=True,
        )

    remaining = lot.current_volume_gallons - volume
    data: dict = {"current_volume_gallons": remaining}
    if remaining <= 0:
        data["status"] = LotStatus.BOTTLED
    updated = await uow.lots.update(tenant_id, lot_id, data)
    if not updated:
        raise NotFound("Lot not found")
    await uow.commit()
    logger.info(
        "Bottled %s gal from lot %s (run %s), %s gal remaining", volume, lot_id, run_id, remaining
    )
    return BottleLotResult(
        lot=updated,
        bottling_run_id=run_id,
        volume_gallons=volume,
        bulk_transaction=bulk.transaction,
        bottled_transaction=bottled.transaction,
    )
