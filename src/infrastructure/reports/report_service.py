from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from typing import Any, Literal

from src.domain.models.winery_registration import WineryRegistration
from src.infrastructure.reports.pdf_generator import PDFGenerator
from src.interfaces.http.schemas.ttb import ReportExportResponse


class ReportService:
    def __init__(self, pdf_generator: PDFGenerator):
        self.pdf_generator = pdf_generator

    @staticmethod
    def file_name(report: dict[str, Any], extension: str) -> str:
        period = report.get("period", {})
        return f"ttb_5120_17_{period.get('start', '')}_{period.get('end', '')}.{extension}"

    def export(
        self,
        report: dict[str, Any],
        *,
        registration: WineryRegistration | None = None,
        fmt: Literal["pdf", "json"] = "pdf",
    ) -> ReportExportResponse:
        generated_at = datetime.now(timezone.utc).isoformat()
        if fmt == "json":
            return ReportExportResponse(
                report_id=str(uuid.uuid4()),
                title="TTB Form 5120.17",
                generated_at=generated_at,
                format="json",
                content=json.dumps(report),
                data=report,
                file_name=self.file_name(report, "json"),
            )
        return ReportExportResponse(
            report_id=str(uuid.uuid4()),
            title="TTB Form 5120.17",
            generated_at=generated_at,
            format="pdf",
            content=self.pdf_generator.render_ttb_report(report, registration),
            file_name=self.file_name(report, "pdf"),
        )
