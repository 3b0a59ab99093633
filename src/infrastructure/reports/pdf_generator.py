from __future__ import annotations

import base64
import io
from datetime import date, datetime, timezone
from typing import Any

from reportlab.lib import colors
from reportlab.lib.pagesizes import landscape, letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from src.domain.models.winery_registration import WineryRegistration
from src.domain.services.reporting_periods import format_ttb_date
from src.domain.value_objects.tax_class import TaxClass

TABLE_WIDTH = 9.5 * inch


class PDFGenerator:
    """Renders a TTB 5120.17 report dict into a PDF.

    Works only from the serialized report shape (``TTBReport.to_dict``), so saved
    report periods render exactly as they were stored.
    """

    def __init__(self):
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        """Setup custom paragraph styles"""
        self.styles.add(
            ParagraphStyle(
                name="CustomTitle",
                parent=self.styles["Heading1"],
                fontSize=16,
                spaceAfter=12,
                textColor=colors.darkred,
                alignment=1,  # Center
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="CustomHeading",
                parent=self.styles["Heading2"],
                fontSize=12,
                spaceAfter=8,
                textColor=colors.darkred,
            )
        )
        self.styles.add(
            ParagraphStyle(
                name="Warning",
                parent=self.styles["Normal"],
                fontSize=9,
                textColor=colors.red,
            )
        )

    def create_header(self, report: dict[str, Any]) -> list:
        period = report.get("period", {})
        elements = [
            Paragraph("Report of Wine Premises Operations (TTB F 5120.17)", self.styles["CustomTitle"]),
            Paragraph(
                f"Period: {period.get('label', '')} "
                f"({self._date(period.get('start'))} - {self._date(period.get('end'))})",
                self.styles["Normal"],
            ),
        ]
        gen_date = datetime.now(timezone.utc).strftime("%m/%d/%Y %H:%M UTC")
        elements.append(Paragraph(f"Generated: {gen_date}", self.styles["Normal"]))
        elements.append(Spacer(1, 12))
        return elements

    def create_registration_block(self, registration: WineryRegistration | None) -> list:
        if registration is None:
            return [
                Paragraph("Winery registration not configured", self.styles["Warning"]),
                Spacer(1, 12),
            ]
        rows = [
            ["Operated by", registration.operated_by],
            ["Trade name", registration.trade_name or ""],
            ["EIN", registration.ein],
            ["Registry number", registration.registry_number],
            [
                "Premises",
                f"{registration.premises_address}, {registration.premises_city}, "
                f"{registration.premises_state} {registration.premises_zip}",
            ],
        ]
        table = Table(rows, colWidths=[1.6 * inch, TABLE_WIDTH - 1.6 * inch])
        table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 9),
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ]
            )
        )
        return [table, Spacer(1, 12)]

    def create_section_table(self, title: str, section: dict[str, Any]) -> list:
        """One grid per Part I section: line, description, then one column per tax class."""
        elements = [Paragraph(title, self.styles["CustomHeading"])]
        columns = [TaxClass(c) for c in section.get("columns", [])]
        header = ["Line", "Description"] + [
            f"({tc.column}) {self._ascii(tc.short_label)}" for tc in columns
        ]
        table_data = [header]
        emphasis: list[int] = []
        for row in [*section.get("additions", []), *section.get("removals", [])]:
            values = row.get("values", {})
            table_data.append(
                [str(row.get("line", "")), row.get("label", "")]
                + [self._amount(values.get(tc.value)) for tc in columns]
            )
            if row.get("is_total") or row.get("is_end_balance"):
                emphasis.append(len(table_data) - 1)

        value_width = (TABLE_WIDTH - 0.5 * inch - 2.6 * inch) / max(len(columns), 1)
        table = Table(
            table_data,
            colWidths=[0.5 * inch, 2.6 * inch] + [value_width] * len(columns),
            repeatRows=1,
        )
        style = [
            ("BACKGROUND", (0, 0), (-1, 0), colors.darkred),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTSIZE", (0, 0), (-1, -1), 7),
            ("ALIGN", (2, 1), (-1, -1), "RIGHT"),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.black),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ]
        for idx in emphasis:
            style.append(("FONTNAME", (0, idx), (-1, idx), "Helvetica-Bold"))
            style.append(("BACKGROUND", (0, idx), (-1, idx), colors.lightgrey))
        table.setStyle(TableStyle(style))
        elements.append(table)
        elements.append(Spacer(1, 16))
        return elements

    def create_summary(self, summary: dict[str, Any]) -> list:
        elements = [Paragraph("Summary", self.styles["CustomHeading"])]
        labels = (
            ("total_bulk_produced", "Bulk wine produced"),
            ("total_bulk_bottled", "Bulk wine bottled"),
            ("total_bulk_on_hand", "Bulk wine on hand"),
            ("total_bottled_produced", "Bottled wine produced"),
            ("total_bottled_removed", "Bottled wine removed taxpaid"),
            ("total_bottled_on_hand", "Bottled wine on hand"),
        )
        rows = [[label, f"{self._amount(summary.get(key))} gal"] for key, label in labels]
        table = Table(rows, colWidths=[3 * inch, 1.5 * inch])
        table.setStyle(
            TableStyle(
                [
                    ("FONTSIZE", (0, 0), (-1, -1), 9),
                    ("ALIGN", (1, 0), (1, -1), "RIGHT"),
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
                ]
            )
        )
        elements.append(table)
        elements.append(Spacer(1, 12))
        return elements

    def create_warnings(self, warnings: list[str]) -> list:
        if not warnings:
            return []
        elements = [Paragraph("Warnings", self.styles["CustomHeading"])]
        elements.extend(Paragraph(w, self.styles["Warning"]) for w in warnings)
        return elements

    def render_ttb_report(
        self, report: dict[str, Any], registration: WineryRegistration | None = None
    ) -> str:
        elements: list = []
        elements.extend(self.create_header(report))
        elements.extend(self.create_registration_block(registration))
        elements.extend(self.create_section_table("Section A - Bulk Wines", report.get("bulk", {})))
        elements.extend(
            self.create_section_table("Section B - Bottled Wines", report.get("bottled", {}))
        )
        elements.extend(self.create_summary(report.get("summary", {})))
        elements.extend(self.create_warnings(report.get("warnings", [])))
        return self.generate_pdf(elements)

    def generate_pdf(self, elements: list) -> str:
        """Generate PDF and return as base64 string"""
        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=landscape(letter),
            rightMargin=36,
            leftMargin=36,
            topMargin=36,
            bottomMargin=18,
        )

        doc.build(elements)
        buffer.seek(0)

        pdf_data = buffer.getvalue()
        buffer.close()

        return base64.b64encode(pdf_data).decode("utf-8")

    @staticmethod
    def _ascii(text: str) -> str:
        # Base-14 fonts lack the less-or-equal glyph
        return text.replace("\u2264", "<=")

    @staticmethod
    def _amount(value: Any) -> str:
        if value is None:
            return "0.00"
        return f"{float(value):,.2f}"

    @staticmethod
    def _date(value: Any) -> str:
        if not value:
            return ""
        if isinstance(value, str):
            value = date.fromisoformat(value)
        return format_ttb_date(value)
