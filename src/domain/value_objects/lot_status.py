from __future__ import annotations

from enum import Enum


class LotStatus(str, Enum):
    CRUSHING = "crushing"
    FERMENTING = "fermenting"
    PRESSING = "pressing"
    AGING = "aging"
    BLENDING = "blending"
    FILTERING = "filtering"
    READY_TO_BOTTLE = "ready_to_bottle"
    BOTTLED = "bottled"
