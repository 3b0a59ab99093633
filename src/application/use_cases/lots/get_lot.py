from __future__ import annotations

from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.production_lot import ProductionLot


async def execute(uow: UnitOfWork, tenant_id: UUID, lot_id: UUID) -> ProductionLot:
    lot = await uow.lots.get(tenant_id, lot_id)
    if not lot:
        raise NotFound("Lot not found")
    return lot
