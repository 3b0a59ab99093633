from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import UUID

from src.application.errors import ConflictError, NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.ttb_report_period import TTBReportPeriod
from src.domain.value_objects.report_status import ReportStatus

logger = logging.getLogger(__name__)


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    actor_user_id: UUID,
    report_id: UUID,
    status: ReportStatus,
    *,
    confirmation_number: str | None = None,
) -> TTBReportPeriod:
    report = await uow.ttb_reports.get(tenant_id, report_id)
    if not report:
        raise NotFound("Report not found")
    if not report.status.can_transition_to(status):
        raise ConflictError(
            f"Cannot move report from {report.status.value} to {status.value}",
            details={"current_status": report.status.value},
        )
    if report.status is status:
        return report

    now = datetime.now(timezone.utc)
    data: dict = {"status": status, "updated_at": now}
    if status is ReportStatus.SUBMITTED:
        data["submitted_at"] = now
        data["submitted_by"] = actor_user_id
        if confirmation_number:
            data["confirmation_number"] = confirmation_number
    updated = await uow.ttb_reports.update(tenant_id, report_id, data)
    if not updated:
        raise NotFound("Report not found")
    await uow.commit()
    logger.info("TTB report %s moved to %s", report_id, status.value)
    return updated
