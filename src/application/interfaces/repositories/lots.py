from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.production_lot import BarrelAssignment, ProductionLot
from src.domain.value_objects.lot_status import LotStatus
from src.domain.value_objects.tax_class import TaxClass


class LotsRepository(Protocol):
    async def add(self, lot: ProductionLot) -> ProductionLot: ...

    async def get(self, tenant_id: UUID, lot_id: UUID) -> ProductionLot | None: ...

    async def list(
        self,
        tenant_id: UUID,
        *,
        include_archived: bool = False,
        statuses: list[LotStatus] | None = None,
        exclude_statuses: list[LotStatus] | None = None,
    ) -> list[ProductionLot]: ...

    async def update(self, tenant_id: UUID, lot_id: UUID, data: dict) -> ProductionLot | None: ...

    async def add_barrel_assignment(self, assignment: BarrelAssignment) -> BarrelAssignment: ...

    async def bulk_update_tax_classes(
        self, tenant_id: UUID, changes: dict[UUID, TaxClass], rules_version: str
    ) -> int: ...
