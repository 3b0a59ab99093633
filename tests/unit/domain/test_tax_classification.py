from __future__ import annotations

from decimal import Decimal

import pytest

from src.domain.services.tax_classification import check_tax_class_change, determine_tax_class
from src.domain.value_objects.tax_class import TaxClass
from src.domain.value_objects.wine_type import WineType


@pytest.mark.parametrize(
    "abv,expected",
    [
        (None, TaxClass.TABLE_WINE_16),
        (Decimal("12.5"), TaxClass.TABLE_WINE_16),
        (Decimal("16"), TaxClass.TABLE_WINE_16),
        (Decimal("16.01"), TaxClass.TABLE_WINE_21),
        (Decimal("21"), TaxClass.TABLE_WINE_21),
        (Decimal("21.5"), TaxClass.TABLE_WINE_24),
        ("not-a-number", TaxClass.TABLE_WINE_16),
    ],
)
def test_still_wine_is_split_on_abv(abv, expected):
    assert determine_tax_class(WineType.STILL, abv) is expected


@pytest.mark.parametrize(
    "wine_type,expected",
    [
        (WineType.SPARKLING_BF, TaxClass.SPARKLING_BF),
        (WineType.SPARKLING_BP, TaxClass.SPARKLING_BP),
        (WineType.ARTIFICIALLY_CARBONATED, TaxClass.ARTIFICIALLY_CARBONATED),
        (WineType.HARD_CIDER, TaxClass.HARD_CIDER),
    ],
)
def test_non_still_types_map_directly(wine_type, expected):
    assert determine_tax_class(wine_type, Decimal("18")) is expected


def test_hard_cider_flag_overrides_type():
    assert determine_tax_class(WineType.SPARKLING_BF, Decimal("7"), is_hard_cider=True) is (
        TaxClass.HARD_CIDER
    )


def test_unknown_wine_type_falls_back_to_still():
    assert determine_tax_class("fortified", Decimal("19")) is TaxClass.TABLE_WINE_21
    assert determine_tax_class(None, None) is TaxClass.TABLE_WINE_16


def test_crossing_threshold_reports_change():
    change = check_tax_class_change(Decimal("15.5"), Decimal("16.5"))
    assert change is not None
    assert change.old_class is TaxClass.TABLE_WINE_16
    assert change.new_class is TaxClass.TABLE_WINE_21
    assert "16-21%" in change.warning
    assert change.new_label == TaxClass.TABLE_WINE_21.label


def test_same_class_reports_nothing():
    assert check_tax_class_change(Decimal("12"), Decimal("14")) is None
    assert check_tax_class_change(Decimal("12"), Decimal("18"), WineType.SPARKLING_BF) is None
