from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from src.application.errors import ConflictError, NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.production_lot import ProductionLot
from src.domain.services.tax_classification import TAX_CLASS_RULES_VERSION, determine_tax_class
from src.domain.value_objects.wine_type import WineType


@dataclass(slots=True)
class UpdateWineTypeInput:
    wine_type: WineType
    is_hard_cider: bool | None = None


async def execute(
    uow: UnitOfWork, tenant_id: UUID, lot_id: UUID, payload: UpdateWineTypeInput
) -> ProductionLot:
    lot = await uow.lots.get(tenant_id, lot_id)
    if not lot:
        raise NotFound("Lot not found")
    if lot.is_archived:
        raise ConflictError("Archived lots cannot be modified")
    is_hard_cider = (
        payload.is_hard_cider
        if payload.is_hard_cider is not None
        else payload.wine_type is WineType.HARD_CIDER
    )
    updated = await uow.lots.update(
        tenant_id,
        lot_id,
        {
            "wine_type": payload.wine_type,
            "is_hard_cider": is_hard_cider,
            "ttb_tax_class": determine_tax_class(
                payload.wine_type, lot.current_alcohol_pct, is_hard_cider=is_hard_cider
            ),
            "tax_class_rules_version": TAX_CLASS_RULES_VERSION,
        },
    )
    if not updated:
        raise NotFound("Lot not found")
    await uow.commit()
    return updated
