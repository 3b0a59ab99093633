from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any
from uuid import UUID

from src.application.errors import ConflictError, NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.ttb import generate_report
from src.domain.models.ttb_report_period import TTBReportPeriod
from src.domain.services.reporting_periods import PeriodType
from src.domain.value_objects.report_status import ReportStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SaveReportInput:
    period_start: date
    period_end: date
    period_type: PeriodType = PeriodType.MONTHLY
    report_data: dict[str, Any] | None = None


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    payload: SaveReportInput,
    *,
    rounding_digits: int = 2,
) -> TTBReportPeriod:
    """Store the report for its period as a draft, replacing an unsubmitted one."""
    report_data = payload.report_data
    if report_data is None:
        report = await generate_report.execute(
            uow,
            tenant_id,
            payload.period_start,
            payload.period_end,
            period_type=payload.period_type,
        )
        report_data = report.to_dict(rounding_digits)

    existing = await uow.ttb_reports.get_by_period(
        tenant_id, payload.period_start, payload.period_end
    )
    if existing:
        if existing.status is ReportStatus.SUBMITTED:
            raise ConflictError("Submitted reports cannot be overwritten")
        saved = await uow.ttb_reports.update(
            tenant_id,
            existing.id,
            {
                "period_type": PeriodType(payload.period_type).value,
                "report_data": report_data,
                "status": ReportStatus.DRAFT,
                "updated_at": datetime.now(timezone.utc),
            },
        )
        if not saved:
            raise NotFound("Report not found")
    else:
        saved = await uow.ttb_reports.add(
            TTBReportPeriod.create(
                tenant_id=tenant_id,
                period_start=payload.period_start,
                period_end=payload.period_end,
                period_type=PeriodType(payload.period_type).value,
                report_data=report_data,
            )
        )
    await uow.commit()
    logger.info(
        "Saved TTB report %s for %s..%s", saved.id, payload.period_start, payload.period_end
    )
    return saved
