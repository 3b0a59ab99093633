from __future__ import annotations

from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.production_lot import ProductionLot
from src.domain.value_objects.bond_status import BondStatus


async def execute(
    uow: UnitOfWork, tenant_id: UUID, lot_id: UUID, bond_status: BondStatus
) -> ProductionLot:
    updated = await uow.lots.update(tenant_id, lot_id, {"bond_status": bond_status})
    if not updated:
        raise NotFound("Lot not found")
    await uow.commit()
    return updated
