from __future__ import annotations

from enum import Enum


class TaxClass(str, Enum):
    """TTB Form 5120.17 tax class columns."""

    TABLE_WINE_16 = "table_wine_16"  # (a) still wine not over 16%
    TABLE_WINE_21 = "table_wine_21"  # (b) over 16% to 21%
    TABLE_WINE_24 = "table_wine_24"  # (c) over 21% to 24%
    ARTIFICIALLY_CARBONATED = "artificially_carbonated"  # (d)
    SPARKLING_BF = "sparkling_bf"  # (e) bottle fermented
    SPARKLING_BP = "sparkling_bp"  # (e) bulk process
    HARD_CIDER = "hard_cider"  # (f)

    @property
    def label(self) -> str:
        return TAX_CLASS_LABELS[self]

    @property
    def short_label(self) -> str:
        return TAX_CLASS_SHORT_LABELS[self]

    @property
    def column(self) -> str:
        return TAX_CLASS_COLUMNS[self]


# Column order on the form
TAX_CLASS_ORDER: tuple[TaxClass, ...] = (
    TaxClass.TABLE_WINE_16,
    TaxClass.TABLE_WINE_21,
    TaxClass.TABLE_WINE_24,
    TaxClass.ARTIFICIALLY_CARBONATED,
    TaxClass.SPARKLING_BF,
    TaxClass.SPARKLING_BP,
    TaxClass.HARD_CIDER,
)

TAX_CLASS_LABELS: dict[TaxClass, str] = {
    TaxClass.TABLE_WINE_16: "(a) Table Wine - Not over 16%",
    TaxClass.TABLE_WINE_21: "(b) Table Wine - Over 16% to 21%",
    TaxClass.TABLE_WINE_24: "(c) Table Wine - Over 21% to 24%",
    TaxClass.ARTIFICIALLY_CARBONATED: "(d) Artificially Carbonated",
    TaxClass.SPARKLING_BF: "(e) Sparkling - Bottle Fermented",
    TaxClass.SPARKLING_BP: "(e) Sparkling - Bulk Process",
    TaxClass.HARD_CIDER: "(f) Hard Cider",
}

TAX_CLASS_SHORT_LABELS: dict[TaxClass, str] = {
    TaxClass.TABLE_WINE_16: "≤16%",
    TaxClass.TABLE_WINE_21: "16-21%",
    TaxClass.TABLE_WINE_24: "21-24%",
    TaxClass.ARTIFICIALLY_CARBONATED: "Carbonated",
    TaxClass.SPARKLING_BF: "Sparkling BF",
    TaxClass.SPARKLING_BP: "Sparkling BP",
    TaxClass.HARD_CIDER: "Hard Cider",
}

TAX_CLASS_COLUMNS: dict[TaxClass, str] = {
    TaxClass.TABLE_WINE_16: "a",
    TaxClass.TABLE_WINE_21: "b",
    TaxClass.TABLE_WINE_24: "c",
    TaxClass.ARTIFICIALLY_CARBONATED: "d",
    TaxClass.SPARKLING_BF: "e",
    TaxClass.SPARKLING_BP: "e",
    TaxClass.HARD_CIDER: "f",
}
