from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import InfrastructureError
from src.application.interfaces.repositories.winery_registrations import (
    WineryRegistrationsRepository,
)
from src.domain.models.winery_registration import WineryRegistration
from src.infrastructure.db.orm.winery_registration import WineryRegistrationORM

_FIELDS = (
    "operated_by",
    "trade_name",
    "ein",
    "registry_number",
    "premises_address",
    "premises_city",
    "premises_state",
    "premises_zip",
    "updated_at",
)


class WineryRegistrationsSQLAlchemyRepository(WineryRegistrationsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: WineryRegistrationORM) -> WineryRegistration:
        return WineryRegistration(
            tenant_id=orm.tenant_id,
            operated_by=orm.operated_by,
            trade_name=orm.trade_name,
            ein=orm.ein,
            registry_number=orm.registry_number,
            premises_address=orm.premises_address,
            premises_city=orm.premises_city,
            premises_state=orm.premises_state,
            premises_zip=orm.premises_zip,
            updated_at=orm.updated_at,
        )

    async def get(self, tenant_id: UUID) -> WineryRegistration | None:
        orm = await self.session.get(WineryRegistrationORM, tenant_id)
        return self._to_domain(orm) if orm else None

    async def upsert(self, registration: WineryRegistration) -> WineryRegistration:
        orm = await self.session.get(WineryRegistrationORM, registration.tenant_id)
        if orm is None:
            orm = WineryRegistrationORM(tenant_id=registration.tenant_id)
            self.session.add(orm)
        for name in _FIELDS:
            setattr(orm, name, getattr(registration, name))
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise InfrastructureError("Failed to save winery registration") from exc
        return self._to_domain(orm)

    async def delete(self, tenant_id: UUID) -> bool:
        stmt = (
            delete(WineryRegistrationORM)
            .where(WineryRegistrationORM.tenant_id == tenant_id)
            .returning(WineryRegistrationORM.tenant_id)
        )
        res = await self.session.execute(stmt)
        return res.scalar_one_or_none() is not None
