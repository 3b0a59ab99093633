from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.winery_registration import WineryRegistration


class WineryRegistrationsRepository(Protocol):
    async def get(self, tenant_id: UUID) -> WineryRegistration | None: ...

    async def upsert(self, registration: WineryRegistration) -> WineryRegistration: ...

    async def delete(self, tenant_id: UUID) -> bool: ...
