from __future__ import annotations

import logging
from datetime import date
from uuid import UUID

from src.application.errors import InfrastructureError, ReportGenerationError, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.services.reporting_periods import PeriodType
from src.domain.services.ttb_report import TTBReport, build_ttb_report

logger = logging.getLogger(__name__)


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    period_start: date,
    period_end: date,
    *,
    period_type: PeriodType | str = PeriodType.MONTHLY,
) -> TTBReport:
    if period_end < period_start:
        raise ValidationError("period_end must not be before period_start")
    try:
        transactions = await uow.ttb_transactions.list(
            tenant_id, date_from=period_start, date_to=period_end
        )
        prior = await uow.ttb_transactions.list(tenant_id, before=period_start)
    except InfrastructureError as exc:
        logger.exception("Loading TTB ledger failed for tenant %s", tenant_id)
        raise ReportGenerationError(
            "Failed to generate report, try again", details={"reason": exc.message}
        ) from exc

    report = build_ttb_report(
        period_start, period_end, transactions, prior, period_type=period_type
    )
    logger.info(
        "Generated TTB report %s..%s for tenant %s (%d transactions, %d warnings)",
        period_start,
        period_end,
        tenant_id,
        report.transaction_count,
        len(report.warnings),
    )
    return report
