from __future__ import annotations

from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.production_lot import ProductionLot
from src.domain.value_objects.lot_status import LotStatus


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    *,
    include_archived: bool = False,
    status: LotStatus | None = None,
) -> list[ProductionLot]:
    return await uow.lots.list(
        tenant_id,
        include_archived=include_archived,
        statuses=[status] if status else None,
    )
