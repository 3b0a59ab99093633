from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.lots.recalculate_tax_class import effective_tax_class
from src.domain.value_objects.bond_status import BondStatus
from src.domain.value_objects.lot_status import LotStatus
from src.domain.value_objects.tax_class import TAX_CLASS_ORDER, TaxClass


@dataclass(slots=True)
class BulkInventoryLine:
    in_bond: Decimal = Decimal("0")
    taxpaid: Decimal = Decimal("0")
    lot_count: int = 0

    @property
    def total(self) -> Decimal:
        return self.in_bond + self.taxpaid


@dataclass(slots=True)
class BulkInventory:
    by_tax_class: dict[TaxClass, BulkInventoryLine] = field(default_factory=dict)

    @property
    def total_gallons(self) -> Decimal:
        return sum((line.total for line in self.by_tax_class.values()), Decimal("0"))


async def execute(uow: UnitOfWork, tenant_id: UUID) -> BulkInventory:
    """Current bulk volume of unbottled, active lots split by tax class and bond status."""
    lots = await uow.lots.list(tenant_id, exclude_statuses=[LotStatus.BOTTLED])
    inventory = BulkInventory(by_tax_class={tc: BulkInventoryLine() for tc in TAX_CLASS_ORDER})
    for lot in lots:
        volume = lot.current_volume_gallons or Decimal("0")
        line = inventory.by_tax_class[effective_tax_class(lot)]
        if lot.bond_status is BondStatus.TAXPAID:
            line.taxpaid += volume
        else:
            line.in_bond += volume
        line.lot_count += 1
    return inventory
