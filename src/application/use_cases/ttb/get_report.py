from __future__ import annotations

from datetime import date
from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.ttb_report_period import TTBReportPeriod


async def execute(uow: UnitOfWork, tenant_id: UUID, report_id: UUID) -> TTBReportPeriod:
    report = await uow.ttb_reports.get(tenant_id, report_id)
    if not report:
        raise NotFound("Report not found")
    return report


async def by_period(
    uow: UnitOfWork, tenant_id: UUID, period_start: date, period_end: date
) -> TTBReportPeriod | None:
    return await uow.ttb_reports.get_by_period(tenant_id, period_start, period_end)
