from __future__ import annotations

from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.winery_registration import WineryRegistration


async def execute(uow: UnitOfWork, tenant_id: UUID) -> WineryRegistration | None:
    return await uow.winery_registrations.get(tenant_id)
