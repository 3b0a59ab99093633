from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from src.domain.services.tax_classification import determine_tax_class
from src.domain.services.ttb_report import (
    BULK_REMOVAL_LINES,
    build_ttb_report,
    calculate_balances,
)
from src.domain.value_objects.tax_class import TAX_CLASS_ORDER, TaxClass
from src.domain.value_objects.transaction_type import LedgerSection, TransactionType
from src.domain.value_objects.wine_type import WineType

START = date(2024, 3, 1)
END = date(2024, 3, 31)


@dataclass
class Entry:
    transaction_type: TransactionType
    tax_class: TaxClass
    volume_gallons: Decimal


def entry(tx_type: TransactionType, gallons: str, tax_class=TaxClass.TABLE_WINE_16) -> Entry:
    return Entry(tx_type, tax_class, Decimal(gallons))


def test_produced_minus_bottled_is_on_hand():
    report = build_ttb_report(
        START,
        END,
        [
            entry(TransactionType.PRODUCED_FERMENTATION, "100"),
            entry(TransactionType.BULK_BOTTLED, "40"),
            entry(TransactionType.BOTTLED_PRODUCED, "40"),
        ],
    )
    tc = TaxClass.TABLE_WINE_16
    assert report.bulk.value(2, tc) == Decimal("100")
    assert report.bulk.value(13, tc) == Decimal("40")
    assert report.bulk.end_balance.values[tc] == Decimal("60")
    assert report.bottled.end_balance.values[tc] == Decimal("40")
    assert report.summary.total_bulk_on_hand == Decimal("60")
    assert report.summary.by_tax_class[tc].bottled_produced == Decimal("40")
    assert report.transaction_count == 3
    assert report.warnings == []


def test_prior_entries_feed_beginning_balance():
    prior = [
        entry(TransactionType.PRODUCED_FERMENTATION, "500", TaxClass.TABLE_WINE_21),
        entry(TransactionType.BULK_REMOVED_TAXPAID, "120", TaxClass.TABLE_WINE_21),
    ]
    current = [entry(TransactionType.BULK_ON_HAND_BEGIN, "10", TaxClass.TABLE_WINE_21)]
    report = build_ttb_report(START, END, current, prior)
    assert report.bulk.value(1, TaxClass.TABLE_WINE_21) == Decimal("390")
    assert report.bulk.total_additions.values[TaxClass.TABLE_WINE_21] == Decimal("390")


def test_removal_total_balances_against_additions():
    report = build_ttb_report(
        START,
        END,
        [
            entry(TransactionType.PRODUCED_FERMENTATION, "80", TaxClass.HARD_CIDER),
            entry(TransactionType.BULK_TASTING, "5", TaxClass.HARD_CIDER),
            entry(TransactionType.BULK_LOSSES_OTHER, "3", TaxClass.HARD_CIDER),
        ],
    )
    removals_total = report.bulk.removals[-1]
    assert removals_total.is_total
    for tc in TAX_CLASS_ORDER:
        assert removals_total.values[tc] == report.bulk.total_additions.values[tc]
    assert report.bulk.end_balance.values[TaxClass.HARD_CIDER] == Decimal("72")


def test_negative_balance_is_reported_not_clamped():
    report = build_ttb_report(START, END, [entry(TransactionType.BULK_BOTTLED, "15")])
    assert report.bulk.end_balance.values[TaxClass.TABLE_WINE_16] == Decimal("-15")
    assert report.warnings == ["Bulk on hand for table_wine_16 is negative (-15)"]


def test_line_layout_and_serialization():
    report = build_ttb_report(
        START,
        END,
        [entry(TransactionType.PRODUCED_BLENDING, "12.346")],
        generated_at=datetime(2024, 4, 1, tzinfo=timezone.utc),
    )
    data = report.to_dict()
    assert [r["line"] for r in data["bulk"]["additions"]] == [str(n) for n in range(1, 13)]
    assert [r["line"] for r in data["bulk"]["removals"]] == [
        str(d.line) for d in BULK_REMOVAL_LINES
    ]
    assert [r["line"] for r in data["bottled"]["additions"]] == [str(n) for n in range(1, 8)]
    assert [r["line"] for r in data["bottled"]["removals"]] == [str(n) for n in range(8, 22)]
    assert data["bulk"]["additions"][4]["values"]["table_wine_16"] == 12.35
    assert data["bulk"]["columns"] == [tc.value for tc in TAX_CLASS_ORDER]
    assert data["period"] == {"start": "2024-03-01", "end": "2024-03-31", "label": "March 2024"}
    assert data["generated_at"].startswith("2024-04-01")


def test_inverted_period_is_rejected():
    with pytest.raises(ValueError):
        build_ttb_report(END, START, [])


def test_calculate_balances_splits_sections():
    balances = calculate_balances(
        [
            entry(TransactionType.BOTTLED_PRODUCED, "30"),
            entry(TransactionType.BOTTLED_BREAKAGE, "2"),
            entry(TransactionType.RECEIVED_BOND, "7"),
        ]
    )
    assert balances[LedgerSection.BOTTLED][TaxClass.TABLE_WINE_16] == Decimal("28")
    assert balances[LedgerSection.BULK][TaxClass.TABLE_WINE_16] == Decimal("7")


@pytest.mark.parametrize("wine_type", list(WineType))
@pytest.mark.parametrize("abv", [None, "0", "7.5", "14", "16", "16.01", "18.5", "21", "21.5", "24"])
def test_gallons_land_under_the_lots_tax_class(wine_type, abv):
    tax_class = determine_tax_class(wine_type, abv)
    report = build_ttb_report(
        START,
        END,
        [
            entry(TransactionType.PRODUCED_FERMENTATION, "100", tax_class),
            entry(TransactionType.BULK_BOTTLED, "40", tax_class),
        ],
    )
    for tc, item in report.summary.by_tax_class.items():
        if tc is tax_class:
            assert item.bulk_produced == Decimal("100")
            assert item.bulk_on_hand == Decimal("60")
        else:
            assert item.bulk_produced == Decimal("0")
            assert item.bulk_on_hand == Decimal("0")
    assert report.summary.total_bulk_on_hand == Decimal("60")
