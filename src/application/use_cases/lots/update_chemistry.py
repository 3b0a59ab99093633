from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from src.application.errors import ConflictError, NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.production_lot import ProductionLot
from src.domain.services.tax_classification import (
    TAX_CLASS_RULES_VERSION,
    TaxClassChange,
    check_tax_class_change,
    determine_tax_class,
)


@dataclass(slots=True)
class UpdateChemistryInput:
    current_ph: Decimal | None = None
    current_ta: Decimal | None = None
    current_alcohol_pct: Decimal | None = None


@dataclass(slots=True)
class UpdateChemistryResult:
    lot: ProductionLot
    tax_class_change: TaxClassChange | None = None


async def execute(
    uow: UnitOfWork, tenant_id: UUID, lot_id: UUID, payload: UpdateChemistryInput
) -> UpdateChemistryResult:
    for field_name in ("current_ph", "current_ta", "current_alcohol_pct"):
        value = getattr(payload, field_name)
        if value is not None and value < 0:
            raise ValidationError(f"{field_name} must not be negative")
    if payload.current_alcohol_pct is not None and payload.current_alcohol_pct > 100:
        raise ValidationError("current_alcohol_pct must not exceed 100")

    lot = await uow.lots.get(tenant_id, lot_id)
    if not lot:
        raise NotFound("Lot not found")
    if lot.is_archived:
        raise ConflictError("Archived lots cannot be modified")

    data: dict = {
        name: getattr(payload, name)
        for name in ("current_ph", "current_ta", "current_alcohol_pct")
        if getattr(payload, name) is not None
    }
    if not data:
        return UpdateChemistryResult(lot=lot)

    change = None
    if "current_alcohol_pct" in data:
        change = check_tax_class_change(
            lot.current_alcohol_pct,
            data["current_alcohol_pct"],
            lot.wine_type,
            is_hard_cider=lot.is_hard_cider,
        )
        data["ttb_tax_class"] = determine_tax_class(
            lot.wine_type, data["current_alcohol_pct"], is_hard_cider=lot.is_hard_cider
        )
        data["tax_class_rules_version"] = TAX_CLASS_RULES_VERSION

    updated = await uow.lots.update(tenant_id, lot_id, data)
    if not updated:
        raise NotFound("Lot not found")
    await uow.commit()
    return UpdateChemistryResult(lot=updated, tax_class_change=change)
