from __future__ import annotations

from datetime import date
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError, InfrastructureError
from src.application.interfaces.repositories.ttb_reports import TTBReportsRepository
from src.domain.models.ttb_report_period import TTBReportPeriod
from src.domain.value_objects.report_status import ReportStatus
from src.infrastructure.db.orm.ttb_report_period import TTBReportPeriodORM


class TTBReportsSQLAlchemyRepository(TTBReportsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: TTBReportPeriodORM) -> TTBReportPeriod:
        return TTBReportPeriod(
            id=orm.id,
            tenant_id=orm.tenant_id,
            period_start=orm.period_start,
            period_end=orm.period_end,
            period_type=orm.period_type,
            status=orm.status,
            report_data=orm.report_data,
            submitted_at=orm.submitted_at,
            submitted_by=orm.submitted_by,
            confirmation_number=orm.confirmation_number,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def add(self, report: TTBReportPeriod) -> TTBReportPeriod:
        orm = TTBReportPeriodORM(
            id=report.id,
            tenant_id=report.tenant_id,
            period_start=report.period_start,
            period_end=report.period_end,
            period_type=report.period_type,
            status=report.status,
            report_data=report.report_data,
            submitted_at=report.submitted_at,
            submitted_by=report.submitted_by,
            confirmation_number=report.confirmation_number,
            created_at=report.created_at,
            updated_at=report.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("A report already exists for this period") from exc
        return self._to_domain(orm)

    async def get(self, tenant_id: UUID, report_id: UUID) -> TTBReportPeriod | None:
        stmt = select(TTBReportPeriodORM).where(
            TTBReportPeriodORM.tenant_id == tenant_id, TTBReportPeriodORM.id == report_id
        )
        res = await self.session.execute(stmt)
        orm = res.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_by_period(
        self, tenant_id: UUID, period_start: date, period_end: date
    ) -> TTBReportPeriod | None:
        stmt = select(TTBReportPeriodORM).where(
            TTBReportPeriodORM.tenant_id == tenant_id,
            TTBReportPeriodORM.period_start == period_start,
            TTBReportPeriodORM.period_end == period_end,
        )
        res = await self.session.execute(stmt)
        orm = res.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(
        self,
        tenant_id: UUID,
        *,
        status: ReportStatus | None = None,
        year: int | None = None,
    ) -> list[TTBReportPeriod]:
        stmt = select(TTBReportPeriodORM).where(TTBReportPeriodORM.tenant_id == tenant_id)
        if status is not None:
            stmt = stmt.where(TTBReportPeriodORM.status == status)
        if year is not None:
            stmt = stmt.where(
                TTBReportPeriodORM.period_start >= date(year, 1, 1),
                TTBReportPeriodORM.period_end <= date(year, 12, 31),
            )
        stmt = stmt.order_by(TTBReportPeriodORM.period_start.desc())
        res = await self.session.execute(stmt)
        return [self._to_domain(r) for r in res.scalars().all()]

    async def update(
        self, tenant_id: UUID, report_id: UUID, data: dict
    ) -> TTBReportPeriod | None:
        stmt = (
            update(TTBReportPeriodORM)
            .where(TTBReportPeriodORM.tenant_id == tenant_id, TTBReportPeriodORM.id == report_id)
            .values(**data)
            .returning(TTBReportPeriodORM)
        )
        try:
            res = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise InfrastructureError("Failed to update TTB report") from exc
        orm = res.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def delete(self, tenant_id: UUID, report_id: UUID) -> bool:
        stmt = (
            delete(TTBReportPeriodORM)
            .where(TTBReportPeriodORM.tenant_id == tenant_id, TTBReportPeriodORM.id == report_id)
            .returning(TTBReportPeriodORM.id)
        )
        res = await self.session.execute(stmt)
        return res.scalar_one_or_none() is not None
