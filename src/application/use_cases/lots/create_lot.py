from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.production_lot import ProductionLot
from src.domain.services.tax_classification import TAX_CLASS_RULES_VERSION, determine_tax_class
from src.domain.value_objects.bond_status import BondStatus
from src.domain.value_objects.lot_status import LotStatus
from src.domain.value_objects.wine_type import WineType

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateLotInput:
    name: str
    status: LotStatus = LotStatus.FERMENTING
    varietal: str | None = None
    vintage: int | None = None
    wine_type: WineType = WineType.STILL
    is_hard_cider: bool = False
    current_volume_gallons: Decimal = Decimal("0")
    current_alcohol_pct: Decimal | None = None
    current_ph: Decimal | None = None
    current_ta: Decimal | None = None
    aging_start_date: datetime | None = None
    fermentation_end_date: datetime | None = None
    container_name: str | None = None
    bond_status: BondStatus = BondStatus.IN_BOND


async def execute(uow: UnitOfWork, tenant_id: UUID, payload: CreateLotInput) -> ProductionLot:
    if not payload.name or not payload.name.strip():
        raise ValidationError("Lot name is required")
    try:
        lot = ProductionLot.create(
            tenant_id=tenant_id,
            name=payload.name.strip(),
            status=payload.status,
            varietal=payload.varietal,
            vintage=payload.vintage,
            wine_type=payload.wine_type,
            is_hard_cider=payload.is_hard_cider,
            current_volume_gallons=payload.current_volume_gallons,
            current_alcohol_pct=payload.current_alcohol_pct,
            current_ph=payload.current_ph,
            current_ta=payload.current_ta,
            aging_start_date=payload.aging_start_date,
            fermentation_end_date=payload.fermentation_end_date,
            container_name=payload.container_name,
            bond_status=payload.bond_status,
        )
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    lot.ttb_tax_class = determine_tax_class(
        lot.wine_type, lot.current_alcohol_pct, is_hard_cider=lot.is_hard_cider
    )
    lot.tax_class_rules_version = TAX_CLASS_RULES_VERSION
    created = await uow.lots.add(lot)
    await uow.commit()
    logger.info("Created lot %s (%s) for tenant %s", created.id, created.name, tenant_id)
    return created
