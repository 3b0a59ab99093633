from __future__ import annotations

from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.ttb_transaction import TTBTransaction


async def execute(uow: UnitOfWork, tenant_id: UUID, transaction_id: UUID) -> TTBTransaction:
    tx = await uow.ttb_transactions.get(tenant_id, transaction_id)
    if not tx:
        raise NotFound("Transaction not found")
    return tx
