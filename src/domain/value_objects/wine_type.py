from __future__ import annotations

from enum import Enum


class WineType(str, Enum):
    STILL = "still"
    SPARKLING_BF = "sparkling_bf"
    SPARKLING_BP = "sparkling_bp"
    ARTIFICIALLY_CARBONATED = "artificially_carbonated"
    HARD_CIDER = "hard_cider"

    @property
    def label(self) -> str:
        return WINE_TYPE_LABELS[self]


WINE_TYPE_LABELS: dict[WineType, str] = {
    WineType.STILL: "Still Wine",
    WineType.SPARKLING_BF: "Sparkling (Bottle Fermented)",
    WineType.SPARKLING_BP: "Sparkling (Bulk Process)",
    WineType.ARTIFICIALLY_CARBONATED: "Artificially Carbonated",
    WineType.HARD_CIDER: "Hard Cider",
}
