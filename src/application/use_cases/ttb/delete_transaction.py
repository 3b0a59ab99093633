from __future__ import annotations

from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork


async def execute(uow: UnitOfWork, tenant_id: UUID, transaction_id: UUID) -> None:
    deleted = await uow.ttb_transactions.delete(tenant_id, transaction_id)
    if not deleted:
        raise NotFound("Transaction not found")
    await uow.commit()
