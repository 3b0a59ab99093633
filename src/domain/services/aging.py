"""Aging duration and start-date provenance for production lots.

Start date candidates are evaluated in strict priority order:
explicit ``aging_start_date``, then the earliest barrel assignment, then
``fermentation_end_date``. The first present candidate wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from enum import Enum

from src.domain.models.production_lot import ProductionLot


class AgingSource(str, Enum):
    AGING_START_DATE = "aging_start_date"
    BARREL_ASSIGNMENT = "barrel_assignment"
    FERMENTATION_END = "fermentation_end"


@dataclass(slots=True, frozen=True)
class AgingStart:
    date: datetime | None
    source: AgingSource | None
    is_unknown: bool


UNKNOWN_AGING_START = AgingStart(date=None, source=None, is_unknown=True)


def _as_utc(value: datetime | date) -> datetime:
    if not isinstance(value, datetime):
        value = datetime.combine(value, time(0, 0))
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def get_aging_start_date(lot: ProductionLot) -> AgingStart:
    if lot.aging_start_date:
        return AgingStart(
            date=_as_utc(lot.aging_start_date),
            source=AgingSource.AGING_START_DATE,
            is_unknown=False,
        )

    # Only populated when the caller loaded the lot's barrel assignments
    assigned = [_as_utc(b.assigned_at) for b in lot.barrel_assignments or [] if b.assigned_at]
    if assigned:
        return AgingStart(date=min(assigned), source=AgingSource.BARREL_ASSIGNMENT, is_unknown=False)

    if lot.fermentation_end_date:
        return AgingStart(
            date=_as_utc(lot.fermentation_end_date),
            source=AgingSource.FERMENTATION_END,
            is_unknown=False,
        )

    return UNKNOWN_AGING_START


def months_between(start: datetime | date, now: datetime | date) -> int:
    """Calendar-month difference floored at zero. Day of month is ignored."""
    start_dt = _as_utc(start)
    now_dt = _as_utc(now)
    delta = (now_dt.year - start_dt.year) * 12 + (now_dt.month - start_dt.month)
    return max(0, delta)


def compute_aging_months(lot: ProductionLot, *, now: datetime | None = None) -> int:
    """Months the lot has been aging; 0 when no start date is known.

    A zero result is ambiguous on its own: check ``get_aging_start_date(lot).is_unknown``
    before treating the lot as freshly started.
    """
    start = get_aging_start_date(lot)
    if start.is_unknown or start.date is None:
        return 0
    return months_between(start.date, now or datetime.now(timezone.utc))
