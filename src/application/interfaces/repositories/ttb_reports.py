from __future__ import annotations

from datetime import date
from typing import Protocol
from uuid import UUID

from src.domain.models.ttb_report_period import TTBReportPeriod
from src.domain.value_objects.report_status import ReportStatus


class TTBReportsRepository(Protocol):
    async def add(self, report: TTBReportPeriod) -> TTBReportPeriod: ...

    async def get(self, tenant_id: UUID, report_id: UUID) -> TTBReportPeriod | None: ...

    async def get_by_period(
        self, tenant_id: UUID, period_start: date, period_end: date
    ) -> TTBReportPeriod | None: ...

    async def list(
        self,
        tenant_id: UUID,
        *,
        status: ReportStatus | None = None,
        year: int | None = None,
    ) -> list[TTBReportPeriod]: ...

    async def update(
        self, tenant_id: UUID, report_id: UUID, data: dict
    ) -> TTBReportPeriod | None: ...

    async def delete(self, tenant_id: UUID, report_id: UUID) -> bool: ...
