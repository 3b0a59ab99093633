from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID


@dataclass(slots=True)
class WineryRegistration:
    tenant_id: UUID
    operated_by: str
    ein: str
    registry_number: str
    premises_address: str
    premises_city: str
    premises_state: str
    premises_zip: str
    trade_name: str | None = None
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
