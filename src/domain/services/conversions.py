from __future__ import annotations

from decimal import Decimal

LITERS_PER_GALLON = Decimal("3.78541")
ML_PER_GALLON = Decimal("3785.41")
DEFAULT_BOTTLE_ML = 750
DEFAULT_BOTTLES_PER_CASE = 12


def liters_to_gallons(liters: Decimal) -> Decimal:
    return Decimal(liters) / LITERS_PER_GALLON


def gallons_to_liters(gallons: Decimal) -> Decimal:
    return Decimal(gallons) * LITERS_PER_GALLON


def bottles_to_gallons(bottles: int, bottle_ml: int = DEFAULT_BOTTLE_ML) -> Decimal:
    return Decimal(bottles) * Decimal(bottle_ml) / ML_PER_GALLON


def cases_to_gallons(
    cases: int,
    bottles_per_case: int = DEFAULT_BOTTLES_PER_CASE,
    bottle_ml: int = DEFAULT_BOTTLE_ML,
) -> Decimal:
    return bottles_to_gallons(cases * bottles_per_case, bottle_ml)
