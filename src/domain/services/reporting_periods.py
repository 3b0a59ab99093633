from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum


class PeriodType(str, Enum):
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUAL = "annual"


@dataclass(slots=True, frozen=True)
class ReportingPeriod:
    value: str
    label: str
    start: date
    end: date


def _month_end(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])


def _monthly(year: int, month: int) -> ReportingPeriod:
    start = date(year, month, 1)
    return ReportingPeriod(
        value=f"{year}-{month:02d}",
        label=f"{calendar.month_name[month]} {year}",
        start=start,
        end=_month_end(year, month),
    )


def _quarterly(year: int, quarter: int) -> ReportingPeriod:
    first_month = quarter * 3 + 1
    return ReportingPeriod(
        value=f"{year}-Q{quarter + 1}",
        label=f"Q{quarter + 1} {year}",
        start=date(year, first_month, 1),
        end=_month_end(year, first_month + 2),
    )


def _annual(year: int) -> ReportingPeriod:
    return ReportingPeriod(
        value=str(year), label=str(year), start=date(year, 1, 1), end=date(year, 12, 31)
    )


def get_reporting_period(
    reference: date | datetime, period_type: PeriodType | str = PeriodType.MONTHLY
) -> ReportingPeriod:
    kind = PeriodType(period_type)
    if kind is PeriodType.MONTHLY:
        return _monthly(reference.year, reference.month)
    if kind is PeriodType.QUARTERLY:
        return _quarterly(reference.year, (reference.month - 1) // 3)
    return _annual(reference.year)


def get_available_periods(
    period_type: PeriodType | str = PeriodType.MONTHLY,
    years_back: int = 2,
    *,
    today: date | None = None,
) -> list[ReportingPeriod]:
    """Periods from the current one back to January of ``years_back`` years ago, newest first."""
    kind = PeriodType(period_type)
    today = today or datetime.now(timezone.utc).date()
    periods: list[ReportingPeriod] = []
    for year in range(today.year, today.year - years_back - 1, -1):
        if kind is PeriodType.MONTHLY:
            last_month = today.month if year == today.year else 12
            periods.extend(_monthly(year, m) for m in range(last_month, 0, -1))
        elif kind is PeriodType.QUARTERLY:
            last_quarter = (today.month - 1) // 3 if year == today.year else 3
            periods.extend(_quarterly(year, q) for q in range(last_quarter, -1, -1))
        else:
            periods.append(_annual(year))
    return periods


def format_ttb_date(value: date | datetime) -> str:
    """MM/DD/YYYY as printed on the form."""
    return value.strftime("%m/%d/%Y")
