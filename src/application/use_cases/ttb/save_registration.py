from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.winery_registration import WineryRegistration
from src.domain.services.registration import format_ein, validate_winery_registration


@dataclass(slots=True)
class SaveRegistrationInput:
    operated_by: str
    ein: str
    registry_number: str
    premises_address: str
    premises_city: str
    premises_state: str
    premises_zip: str
    trade_name: str | None = None


async def execute(
    uow: UnitOfWork, tenant_id: UUID, payload: SaveRegistrationInput
) -> WineryRegistration:
    errors = validate_winery_registration(asdict(payload))
    if errors:
        raise ValidationError("Invalid winery registration", details=errors)
    registration = WineryRegistration(
        tenant_id=tenant_id,
        operated_by=payload.operated_by.strip(),
        ein=format_ein(payload.ein.strip()),
        registry_number=payload.registry_number.strip(),
        premises_address=payload.premises_address.strip(),
        premises_city=payload.premises_city.strip(),
        premises_state=payload.premises_state.strip(),
        premises_zip=payload.premises_zip.strip(),
        trade_name=payload.trade_name.strip() if payload.trade_name else None,
        updated_at=datetime.now(timezone.utc),
    )
    saved = await uow.winery_registrations.upsert(registration)
    await uow.commit()
    return saved
