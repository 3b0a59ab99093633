from __future__ import annotations

from datetime import date
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from src.application.errors import ConflictError, InfrastructureError
from src.infrastructure.repos.lots_sqlalchemy import LotsSQLAlchemyRepository
from src.infrastructure.repos.ttb_transactions_sqlalchemy import (
    TTBTransactionsSQLAlchemyRepository,
)


class BrokenSession:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    async def execute(self, stmt):
        raise self.exc


def connection_lost() -> OperationalError:
    return OperationalError("SELECT 1", {}, Exception("connection refused"))


@pytest.mark.asyncio
async def test_lot_reads_and_updates_surface_storage_failures():
    repo = LotsSQLAlchemyRepository(BrokenSession(connection_lost()))
    with pytest.raises(InfrastructureError):
        await repo.get(uuid4(), uuid4())
    with pytest.raises(InfrastructureError):
        await repo.update(uuid4(), uuid4(), {"name": "Renamed"})


@pytest.mark.asyncio
async def test_lot_update_integrity_violation_is_a_conflict():
    repo = LotsSQLAlchemyRepository(
        BrokenSession(IntegrityError("UPDATE", {}, Exception("duplicate key")))
    )
    with pytest.raises(ConflictError):
        await repo.update(uuid4(), uuid4(), {"name": "Renamed"})


@pytest.mark.asyncio
async def test_transaction_repository_surfaces_storage_failures():
    repo = TTBTransactionsSQLAlchemyRepository(BrokenSession(connection_lost()))
    tenant_id = uuid4()
    with pytest.raises(InfrastructureError):
        await repo.get(tenant_id, uuid4())
    with pytest.raises(InfrastructureError):
        await repo.get_by_source_event(tenant_id, "manual", uuid4())
    with pytest.raises(InfrastructureError):
        await repo.update(tenant_id, uuid4(), {"notes": "corrected"})
    with pytest.raises(InfrastructureError):
        await repo.delete(tenant_id, uuid4())
    with pytest.raises(InfrastructureError) as exc_info:
        await repo.sum_by_type_and_class(
            tenant_id, date_from=date(2024, 1, 1), date_to=date(2024, 1, 31)
        )
    assert "connection refused" in exc_info.value.details["reason"]
