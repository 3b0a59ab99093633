from __future__ import annotations

from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork


async def execute(uow: UnitOfWork, tenant_id: UUID) -> None:
    if not await uow.winery_registrations.delete(tenant_id):
        raise NotFound("Winery registration not found")
    await uow.commit()
