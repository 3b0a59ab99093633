from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from src.domain.value_objects.tax_class import TaxClass
from src.domain.value_objects.wine_type import WineType

# Bump whenever determine_tax_class changes so stored lot classes are retagged
TAX_CLASS_RULES_VERSION = "5120.17-2024.1"

TABLE_WINE_16_MAX_ABV = Decimal("16")
TABLE_WINE_21_MAX_ABV = Decimal("21")

_DIRECT_CLASSES: dict[WineType, TaxClass] = {
    WineType.HARD_CIDER: TaxClass.HARD_CIDER,
    WineType.SPARKLING_BF: TaxClass.SPARKLING_BF,
    WineType.SPARKLING_BP: TaxClass.SPARKLING_BP,
    WineType.ARTIFICIALLY_CARBONATED: TaxClass.ARTIFICIALLY_CARBONATED,
}


@dataclass(slots=True, frozen=True)
class TaxClassChange:
    old_class: TaxClass
    new_class: TaxClass
    warning: str

    @property
    def old_label(self) -> str:
        return self.old_class.label

    @property
    def new_label(self) -> str:
        return self.new_class.label


def _parse_abv(value: Decimal | float | str | None) -> Decimal | None:
    if value is None:
        return None
    try:
        abv = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
    return abv if abv.is_finite() else None


def _parse_wine_type(value: WineType | str | None) -> WineType:
    if not value:
        return WineType.STILL
    try:
        return WineType(value)
    except ValueError:
        # unknown types are classified like still wine
        return WineType.STILL


def determine_tax_class(
    wine_type: WineType | str | None,
    alcohol_pct: Decimal | float | str | None,
    *,
    is_hard_cider: bool = False,
) -> TaxClass:
    """Map wine type and ABV to the TTB tax class column.

    Hard cider wins over everything; carbonated and sparkling types map directly;
    still wine is split on ABV, with an unknown ABV falling into the lowest class.
    """
    kind = _parse_wine_type(wine_type)
    if is_hard_cider:
        return TaxClass.HARD_CIDER
    direct = _DIRECT_CLASSES.get(kind)
    if direct is not None:
        return direct

    abv = _parse_abv(alcohol_pct)
    if abv is None or abv <= TABLE_WINE_16_MAX_ABV:
        return TaxClass.TABLE_WINE_16
    if abv <= TABLE_WINE_21_MAX_ABV:
        return TaxClass.TABLE_WINE_21
    return TaxClass.TABLE_WINE_24


def check_tax_class_change(
    old_abv: Decimal | None,
    new_abv: Decimal | None,
    wine_type: WineType | str | None = WineType.STILL,
    *,
    is_hard_cider: bool = False,
) -> TaxClassChange | None:
    old_class = determine_tax_class(wine_type, old_abv, is_hard_cider=is_hard_cider)
    new_class = determine_tax_class(wine_type, new_abv, is_hard_cider=is_hard_cider)
    if old_class is new_class:
        return None
    return TaxClassChange(
        old_class=old_class,
        new_class=new_class,
        warning=(
            f"ABV change from {old_abv}% to {new_abv}% moves this wine from "
            f"{old_class.short_label} to {new_class.short_label} tax class."
        ),
    )
