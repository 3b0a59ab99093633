from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID

from src.application.errors import ConflictError, NotFound, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.production_lot import BarrelAssignment


@dataclass(slots=True)
class AddBarrelAssignmentInput:
    barrel_name: str
    assigned_at: datetime | None = None


async def execute(
    uow: UnitOfWork, tenant_id: UUID, lot_id: UUID, payload: AddBarrelAssignmentInput
) -> BarrelAssignment:
    if not payload.barrel_name or not payload.barrel_name.strip():
        raise ValidationError("barrel_name is required")
    lot = await uow.lots.get(tenant_id, lot_id)
    if not lot:
        raise NotFound("Lot not found")
    if lot.is_archived:
        raise ConflictError("Archived lots cannot be modified")
    assignment = BarrelAssignment.create(
        lot_id=lot.id,
        barrel_name=payload.barrel_name.strip(),
        assigned_at=payload.assigned_at or datetime.now(timezone.utc),
    )
    created = await uow.lots.add_barrel_assignment(assignment)
    await uow.commit()
    return created
