from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any
from uuid import UUID, uuid4

from src.domain.value_objects.report_status import ReportStatus


@dataclass(slots=True)
class TTBReportPeriod:
    id: UUID
    tenant_id: UUID
    period_start: date
    period_end: date
    period_type: str  # 'monthly' | 'quarterly' | 'annual'
    status: ReportStatus = ReportStatus.DRAFT
    report_data: dict[str, Any] | None = None
    submitted_at: datetime | None = None
    submitted_by: UUID | None = None
    confirmation_number: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        *,
        tenant_id: UUID,
        period_start: date,
        period_end: date,
        period_type: str = "monthly",
        report_data: dict[str, Any] | None = None,
    ) -> TTBReportPeriod:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            tenant_id=tenant_id,
            period_start=period_start,
            period_end=period_end,
            period_type=period_type,
            status=ReportStatus.DRAFT,
            report_data=report_data,
            created_at=now,
            updated_at=now,
        )
