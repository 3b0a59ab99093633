from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.lots.recalculate_tax_class import effective_tax_class
from src.domain.value_objects.lot_status import LotStatus
from src.domain.value_objects.tax_class import TAX_CLASS_ORDER, TaxClass


@dataclass(slots=True)
class FermentationVolume:
    volume_gallons: Decimal = Decimal("0")
    lot_count: int = 0


async def execute(uow: UnitOfWork, tenant_id: UUID) -> dict[TaxClass, FermentationVolume]:
    lots = await uow.lots.list(tenant_id, statuses=[LotStatus.FERMENTING])
    result = {tc: FermentationVolume() for tc in TAX_CLASS_ORDER}
    for lot in lots:
        item = result[effective_tax_class(lot)]
        item.volume_gallons += lot.current_volume_gallons or Decimal("0")
        item.lot_count += 1
    return result
