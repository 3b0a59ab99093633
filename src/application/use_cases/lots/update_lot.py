from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from src.application.errors import ConflictError, NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.lots.recalculate_tax_class import effective_tax_class
from src.application.use_cases.ttb import log_ttb_transaction
from src.domain.models.production_lot import ProductionLot
from src.domain.value_objects.lot_status import LotStatus
from src.domain.value_objects.transaction_type import TransactionType

logger = logging.getLogger(__name__)

FERMENTATION_COMPLETE_EVENT = "lot_fermentation_complete"
_FERMENTATION_STATUSES = {LotStatus.CRUSHING, LotStatus.FERMENTING}


@dataclass(slots=True)
class UpdateLotInput:
    name: str | None = None
    status: LotStatus | None = None
    varietal: str | None = None
    vintage: int | None = None
    current_volume_gallons: Decimal | None = None
    aging_start_date: datetime | None = None
    fermentation_end_date: datetime | None = None
    container_name: str | None = None


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    actor_user_id: UUID | None,
    lot_id: UUID,
    payload: UpdateLotInput,
) -> ProductionLot:
    existing = await uow.lots.get(tenant_id, lot_id)
    if not existing:
        raise NotFound("Lot not found")
    if existing.is_archived:
        raise ConflictError("Archived lots cannot be modified")
    if payload.name is not None and not payload.name.strip():
        raise ValidationError("Lot name must not be empty")
    if payload.current_volume_gallons is not None and payload.current_volume_gallons < 0:
        raise ValidationError("current_volume_gallons must not be negative")

    data: dict = {}
    for field_name in (
        "name",
        "status",
        "varietal",
        "vintage",
        "current_volume_gallons",
        "aging_start_date",
        "fermentation_end_date",
        "container_name",
    ):
        value = getattr(payload, field_name)
        if value is not None:
            data[field_name] = value
    if not data:
        return existing

    updated = await uow.lots.update(tenant_id, lot_id, data)
    if not updated:
        raise NotFound("Lot not found")

    # Leaving fermentation puts the new wine on Section A line 2
    if existing.status in _FERMENTATION_STATUSES and updated.status not in _FERMENTATION_STATUSES:
        volume = updated.current_volume_gallons
        if volume and volume > 0:
            await log_ttb_transaction.record(
                uow,
                tenant_id,
                log_ttb_transaction.LogTTBTransactionInput(
                    source_event_type=FERMENTATION_COMPLETE_EVENT,
                    source_event_id=updated.id,
                    transaction_type=TransactionType.PRODUCED_FERMENTATION,
                    tax_class=effective_tax_class(updated),
                    volume_gallons=volume,
                    lot_id=updated.id,
                    notes=f"Fermentation complete: {updated.name}",
                ),
                actor_user_id=actor_user_id,
            )
    await uow.commit()
    return updated
