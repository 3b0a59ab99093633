"""Aggregation of the production ledger into TTB Form 5120.17 (Part I) line items.

Bulk wines (Section A) and bottled wines (Section B) are built from a fixed line
schema. Each row carries one value per tax class column. Total rows sum the section's
addition lines; the end-balance row is total additions minus every removal line, so
the grid always reconciles.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Protocol

from src.domain.services.reporting_periods import PeriodType, get_reporting_period
from src.domain.value_objects.tax_class import TAX_CLASS_ORDER, TaxClass
from src.domain.value_objects.transaction_type import (
    LedgerDirection,
    LedgerSection,
    TransactionType,
)

ZERO = Decimal("0")


class LedgerEntry(Protocol):
    transaction_type: TransactionType
    tax_class: TaxClass
    volume_gallons: Decimal


@dataclass(slots=True, frozen=True)
class LineDefinition:
    line: int
    label: str
    transaction_type: TransactionType | None = None
    is_beginning: bool = False
    is_total: bool = False
    is_end_balance: bool = False


T = TransactionType

BULK_ADDITION_LINES: tuple[LineDefinition, ...] = (
    LineDefinition(1, "On hand beginning of period", T.BULK_ON_HAND_BEGIN, is_beginning=True),
    LineDefinition(2, "Produced by fermentation", T.PRODUCED_FERMENTATION),
    LineDefinition(3, "Produced by sweetening", T.PRODUCED_SWEETENING),
    LineDefinition(4, "Produced by addition of wine spirits", T.PRODUCED_SPIRITS),
    LineDefinition(5, "Produced by blending", T.PRODUCED_BLENDING),
    LineDefinition(6, "Produced by amelioration", T.PRODUCED_AMELIORATION),
    LineDefinition(7, "Received in bond from others", T.RECEIVED_BOND),
    LineDefinition(8, "Bottled wine dumped to bulk", T.BOTTLED_DUMPED_BULK),
    LineDefinition(9, "Inventory gains", T.BULK_INVENTORY_GAIN),
    LineDefinition(10, "Custom 1"),
    LineDefinition(11, "Custom 2"),
    LineDefinition(12, "TOTAL", is_total=True),
)

BULK_REMOVAL_LINES: tuple[LineDefinition, ...] = (
    LineDefinition(13, "Bottled", T.BULK_BOTTLED),
    LineDefinition(14, "Removed taxpaid", T.BULK_REMOVED_TAXPAID),
    LineDefinition(15, "Transferred in bond", T.BULK_TRANSFERRED_BOND),
    LineDefinition(16, "Exported", T.BULK_EXPORTED),
    LineDefinition(17, "Destroyed", T.BULK_DESTROYED),
    LineDefinition(18, "Used for distillation", T.BULK_DISTILLATION),
    LineDefinition(19, "Vinegar stock", T.BULK_VINEGAR),
    LineDefinition(20, "Tasting use", T.BULK_TASTING),
    *(LineDefinition(line, f"Custom {line - 18}") for line in range(21, 29)),
    LineDefinition(29, "Losses (other than inventory)", T.BULK_LOSSES_OTHER),
    LineDefinition(30, "Inventory losses", T.BULK_LOSSES_INVENTORY),
    LineDefinition(31, "On hand end of period", is_end_balance=True),
    LineDefinition(32, "TOTAL", is_total=True),
)

BOTTLED_ADDITION_LINES: tuple[LineDefinition, ...] = (
    LineDefinition(1, "On hand beginning of period", T.BOTTLED_ON_HAND_BEGIN, is_beginning=True),
    LineDefinition(2, "Bottled", T.BOTTLED_PRODUCED),
    LineDefinition(3, "Custom 1"),
    LineDefinition(4, "Custom 2"),
    LineDefinition(5, "Received in bond", T.BOTTLED_RECEIVED_BOND),
    LineDefinition(6, "Inventory gains", T.BOTTLED_INVENTORY_GAIN),
    LineDefinition(7, "TOTAL", is_total=True),
)

BOTTLED_REMOVAL_LINES: tuple[LineDefinition, ...] = (
    LineDefinition(8, "Removed taxpaid", T.BOTTLED_REMOVED_TAXPAID),
    LineDefinition(9, "Transferred in bond", T.BOTTLED_TRANSFERRED_BOND),
    LineDefinition(10, "Exported", T.BOTTLED_EXPORTED),
    LineDefinition(11, "Tasting use", T.BOTTLED_TASTING),
    LineDefinition(12, "Breakage/losses", T.BOTTLED_BREAKAGE),
    LineDefinition(13, "Dumped to bulk", T.BOTTLED_DUMPED_TO_BULK),
    *(LineDefinition(line, f"Custom {line - 11}") for line in range(14, 20)),
    LineDefinition(20, "On hand end of period", is_end_balance=True),
    LineDefinition(21, "TOTAL", is_total=True),
)

del T


def _empty_values() -> dict[TaxClass, Decimal]:
    return {tc: ZERO for tc in TAX_CLASS_ORDER}


def _round(value: Decimal, ndigits: int) -> float:
    return round(float(value), ndigits)


@dataclass(slots=True)
class ReportRow:
    line: str
    label: str
    values: dict[TaxClass, Decimal] = field(default_factory=_empty_values)
    is_total: bool = False
    is_end_balance: bool = False

    @property
    def row_total(self) -> Decimal:
        return sum(self.values.values(), ZERO)

    def to_dict(self, ndigits: int = 2) -> dict[str, Any]:
        return {
            "line": self.line,
            "label": self.label,
            "values": {tc.value: _round(self.values.get(tc, ZERO), ndigits) for tc in TAX_CLASS_ORDER},
            "is_total": self.is_total,
            "is_end_balance": self.is_end_balance,
        }


@dataclass(slots=True)
class ReportSection:
    additions: list[ReportRow]
    removals: list[ReportRow]
    columns: tuple[TaxClass, ...] = TAX_CLASS_ORDER

    def row(self, line: int) -> ReportRow | None:
        key = str(line)
        for row in (*self.additions, *self.removals):
            if row.line == key and not row.is_total:
                return row
        return None

    def value(self, line: int, tax_class: TaxClass) -> Decimal:
        row = self.row(line)
        return row.values.get(tax_class, ZERO) if row else ZERO

    @property
    def total_additions(self) -> ReportRow:
        return next(r for r in self.additions if r.is_total)

    @property
    def end_balance(self) -> ReportRow:
        return next(r for r in self.removals if r.is_end_balance)

    def to_dict(self, ndigits: int = 2) -> dict[str, Any]:
        return {
            "additions": [r.to_dict(ndigits) for r in self.additions],
            "removals": [r.to_dict(ndigits) for r in self.removals],
            "columns": [tc.value for tc in self.columns],
        }


@dataclass(slots=True)
class TaxClassSummary:
    bulk_produced: Decimal = ZERO
    bulk_bottled: Decimal = ZERO
    bulk_on_hand: Decimal = ZERO
    bottled_produced: Decimal = ZERO
    bottled_removed: Decimal = ZERO
    bottled_on_hand: Decimal = ZERO

    def to_dict(self, ndigits: int = 2) -> dict[str, float]:
        return {
            "bulk_produced": _round(self.bulk_produced, ndigits),
            "bulk_bottled": _round(self.bulk_bottled, ndigits),
            "bulk_on_hand": _round(self.bulk_on_hand, ndigits),
            "bottled_produced": _round(self.bottled_produced, ndigits),
            "bottled_removed": _round(self.bottled_removed, ndigits),
            "bottled_on_hand": _round(self.bottled_on_hand, ndigits),
        }


@dataclass(slots=True)
class ReportSummary:
    total_bulk_produced: Decimal = ZERO
    total_bulk_bottled: Decimal = ZERO
    total_bulk_on_hand: Decimal = ZERO
    total_bottled_produced: Decimal = ZERO
    total_bottled_removed: Decimal = ZERO
    total_bottled_on_hand: Decimal = ZERO
    by_tax_class: dict[TaxClass, TaxClassSummary] = field(default_factory=dict)

    def to_dict(self, ndigits: int = 2) -> dict[str, Any]:
        return {
            "total_bulk_produced": _round(self.total_bulk_produced, ndigits),
            "total_bulk_bottled": _round(self.total_bulk_bottled, ndigits),
            "total_bulk_on_hand": _round(self.total_bulk_on_hand, ndigits),
            "total_bottled_produced": _round(self.total_bottled_produced, ndigits),
            "total_bottled_removed": _round(self.total_bottled_removed, ndigits),
            "total_bottled_on_hand": _round(self.total_bottled_on_hand, ndigits),
            "by_tax_class": {
                tc.value: summary.to_dict(ndigits) for tc, summary in self.by_tax_class.items()
            },
        }


@dataclass(slots=True, frozen=True)
class ReportPeriodInfo:
    start: date
    end: date
    label: str


@dataclass(slots=True)
class TTBReport:
    period: ReportPeriodInfo
    bulk: ReportSection
    bottled: ReportSection
    summary: ReportSummary
    transaction_count: int
    warnings: list[str] = field(default_factory=list)
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self, ndigits: int = 2) -> dict[str, Any]:
        return {
            "period": {
                "start": self.period.start.isoformat(),
                "end": self.period.end.isoformat(),
                "label": self.period.label,
            },
            "bulk": self.bulk.to_dict(ndigits),
            "bottled": self.bottled.to_dict(ndigits),
            "summary": self.summary.to_dict(ndigits),
            "transaction_count": self.transaction_count,
            "warnings": list(self.warnings),
            "generated_at": self.generated_at.isoformat(),
        }


def calculate_balances(
    transactions: Iterable[LedgerEntry],
) -> dict[LedgerSection, dict[TaxClass, Decimal]]:
    """Net on-hand volume per section and tax class (additions minus removals)."""
    balances = {LedgerSection.BULK: _empty_values(), LedgerSection.BOTTLED: _empty_values()}
    for tx in transactions:
        volume = Decimal(tx.volume_gallons or 0)
        tx_type = TransactionType(tx.transaction_type)
        bucket = balances[tx_type.section]
        tax_class = TaxClass(tx.tax_class)
        if tx_type.direction is LedgerDirection.ADDITION:
            bucket[tax_class] += volume
        else:
            bucket[tax_class] -= volume
    return balances


def aggregate_transactions(
    transactions: Iterable[LedgerEntry],
) -> dict[tuple[TransactionType, TaxClass], Decimal]:
    totals: dict[tuple[TransactionType, TaxClass], Decimal] = defaultdict(lambda: ZERO)
    for tx in transactions:
        key = (TransactionType(tx.transaction_type), TaxClass(tx.tax_class))
        totals[key] += Decimal(tx.volume_gallons or 0)
    return dict(totals)


def _build_section(
    addition_lines: Iterable[LineDefinition],
    removal_lines: Iterable[LineDefinition],
    beginning: dict[TaxClass, Decimal],
    period_totals: dict[tuple[TransactionType, TaxClass], Decimal],
) -> ReportSection:
    section = ReportSection(additions=[], removals=[])

    def line_values(definition: LineDefinition) -> dict[TaxClass, Decimal]:
        values = _empty_values()
        if definition.transaction_type is not None:
            for tc in TAX_CLASS_ORDER:
                values[tc] = period_totals.get((definition.transaction_type, tc), ZERO)
        return values

    for definition in addition_lines:
        row = ReportRow(line=str(definition.line), label=definition.label, is_total=definition.is_total)
        if definition.is_total:
            for tc in TAX_CLASS_ORDER:
                row.values[tc] = sum((r.values[tc] for r in section.additions), ZERO)
        elif definition.is_beginning:
            # Prior balance plus opening balances recorded inside the period
            opening = line_values(definition)
            for tc in TAX_CLASS_ORDER:
                row.values[tc] = beginning.get(tc, ZERO) + opening[tc]
        else:
            row.values = line_values(definition)
        section.additions.append(row)

    additions_total = section.total_additions
    for definition in removal_lines:
        row = ReportRow(
            line=str(definition.line),
            label=definition.label,
            is_total=definition.is_total,
            is_end_balance=definition.is_end_balance,
        )
        if definition.is_end_balance:
            for tc in TAX_CLASS_ORDER:
                removed = sum(
                    (r.values[tc] for r in section.removals if not r.is_total and not r.is_end_balance),
                    ZERO,
                )
                row.values[tc] = additions_total.values[tc] - removed
        elif definition.is_total:
            row.values = dict(additions_total.values)
        else:
            row.values = line_values(definition)
        section.removals.append(row)

    return section


def _summarize(bulk: ReportSection, bottled: ReportSection) -> ReportSummary:
    summary = ReportSummary()
    for tc in TAX_CLASS_ORDER:
        item = TaxClassSummary(
            bulk_produced=bulk.value(2, tc),
            bulk_bottled=bulk.value(13, tc),
            bulk_on_hand=bulk.end_balance.values[tc],
            bottled_produced=bottled.value(2, tc),
            bottled_removed=bottled.value(8, tc),
            bottled_on_hand=bottled.end_balance.values[tc],
        )
        summary.total_bulk_produced += item.bulk_produced
        summary.total_bulk_bottled += item.bulk_bottled
        summary.total_bulk_on_hand += item.bulk_on_hand
        summary.total_bottled_produced += item.bottled_produced
        summary.total_bottled_removed += item.bottled_removed
        summary.total_bottled_on_hand += item.bottled_on_hand
        summary.by_tax_class[tc] = item
    return summary


def _negative_balance_warnings(section_name: str, section: ReportSection) -> list[str]:
    return [
        f"{section_name} on hand for {tc.value} is negative ({value})"
        for tc, value in section.end_balance.values.items()
        if value < 0
    ]


def build_ttb_report(
    period_start: date,
    period_end: date,
    transactions: Iterable[LedgerEntry],
    prior_transactions: Iterable[LedgerEntry] = (),
    *,
    period_type: PeriodType | str = PeriodType.MONTHLY,
    generated_at: datetime | None = None,
) -> TTBReport:
    """Build the 5120.17 grid for a period.

    ``transactions`` are the entries dated inside the period; ``prior_transactions``
    are every entry dated before ``period_start`` and only feed the beginning balances.
    """
    if period_end < period_start:
        raise ValueError("period_end must not be before period_start")

    period_entries = list(transactions)
    beginning = calculate_balances(prior_transactions)
    # Opening-balance rows are rendered on line 1, not as period movements
    period_totals = aggregate_transactions(period_entries)

    bulk = _build_section(
        BULK_ADDITION_LINES, BULK_REMOVAL_LINES, beginning[LedgerSection.BULK], period_totals
    )
    bottled = _build_section(
        BOTTLED_ADDITION_LINES,
        BOTTLED_REMOVAL_LINES,
        beginning[LedgerSection.BOTTLED],
        period_totals,
    )

    return TTBReport(
        period=ReportPeriodInfo(
            start=period_start,
            end=period_end,
            label=get_reporting_period(period_start, period_type).label,
        ),
        bulk=bulk,
        bottled=bottled,
        summary=_summarize(bulk, bottled),
        transaction_count=len(period_entries),
        warnings=_negative_balance_warnings("Bulk", bulk)
        + _negative_balance_warnings("Bottled", bottled),
        generated_at=generated_at or datetime.now(timezone.utc),
    )
