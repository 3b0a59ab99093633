from __future__ import annotations

from enum import Enum


class BondStatus(str, Enum):
    IN_BOND = "in_bond"
    TAXPAID = "taxpaid"
    EXPORTED = "exported"
    TRANSFERRED = "transferred"
