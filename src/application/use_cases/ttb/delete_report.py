from __future__ import annotations

from uuid import UUID

from src.application.errors import ConflictError, NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.value_objects.report_status import ReportStatus


async def execute(uow: UnitOfWork, tenant_id: UUID, report_id: UUID) -> None:
    report = await uow.ttb_reports.get(tenant_id, report_id)
    if not report:
        raise NotFound("Report not found")
    if report.status is not ReportStatus.DRAFT:
        raise ConflictError("Only draft reports can be deleted")
    await uow.ttb_reports.delete(tenant_id, report_id)
    await uow.commit()
