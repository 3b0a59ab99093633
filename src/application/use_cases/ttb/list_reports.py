from __future__ import annotations

from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.ttb_report_period import TTBReportPeriod
from src.domain.value_objects.report_status import ReportStatus


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    *,
    status: ReportStatus | None = None,
    year: int | None = None,
) -> list[TTBReportPeriod]:
    return await uow.ttb_reports.list(tenant_id, status=status, year=year)
