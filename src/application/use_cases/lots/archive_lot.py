from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.production_lot import ProductionLot

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, tenant_id: UUID, lot_id: UUID) -> ProductionLot:
    existing = await uow.lots.get(tenant_id, lot_id)
    if not existing:
        raise NotFound("Lot not found")
    if existing.is_archived:
        return existing
    updated = await uow.lots.update(
        tenant_id, lot_id, {"archived_at": datetime.now(timezone.utc)}
    )
    if not updated:
        raise NotFound("Lot not found")
    await uow.commit()
    logger.info("Archived lot %s for tenant %s", lot_id, tenant_id)
    return updated
