"""Strict bottling gates.

Eligibility authorizes an irreversible action (bottling) and is a binary check on
volume, alcohol, name and status. It is intentionally independent from the advisory
readiness score in ``readiness.py``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from src.domain.models.production_lot import ProductionLot
from src.domain.value_objects.lot_status import LotStatus


@dataclass(slots=True, frozen=True)
class BottlingCriteria:
    min_volume_gallons: Decimal = Decimal("10")
    eligible_statuses: frozenset[LotStatus] = field(
        default_factory=lambda: frozenset({LotStatus.READY_TO_BOTTLE})
    )
    nearly_ready_statuses: frozenset[LotStatus] = field(
        default_factory=lambda: frozenset({LotStatus.AGING, LotStatus.BLENDING})
    )
    production_statuses: frozenset[LotStatus] = field(
        default_factory=lambda: frozenset(
            {LotStatus.CRUSHING, LotStatus.FERMENTING, LotStatus.PRESSING}
        )
    )

    def __post_init__(self) -> None:
        if self.eligible_statuses & self.nearly_ready_statuses:
            raise ValueError("eligible and nearly-ready status sets must be disjoint")


DEFAULT_BOTTLING_CRITERIA = BottlingCriteria()


class BlockerType(str, Enum):
    VOLUME = "volume"
    ABV = "abv"
    NAME = "name"
    STATUS_PRODUCTION = "status_production"
    STATUS_NEARLY_READY = "status_nearly_ready"
    LAB = "lab"


@dataclass(slots=True, frozen=True)
class BlockerAction:
    label: str
    path: str
    type: str = "navigate"


@dataclass(slots=True, frozen=True)
class LotBlocker:
    message: str
    type: BlockerType
    action: BlockerAction | None = None


def lot_volume(lot: ProductionLot) -> Decimal:
    return Decimal(lot.current_volume_gallons or 0)


def has_measured_alcohol(lot: ProductionLot) -> bool:
    return lot.current_alcohol_pct is not None and lot.current_alcohol_pct > 0


def has_lab_data(lot: ProductionLot) -> bool:
    return bool(lot.current_ph or lot.current_ta or lot.current_alcohol_pct)


def has_bottling_volume(lot: ProductionLot, criteria: BottlingCriteria) -> bool:
    return lot_volume(lot) >= criteria.min_volume_gallons


def _passes_base_gates(lot: ProductionLot, criteria: BottlingCriteria) -> bool:
    return (
        has_bottling_volume(lot, criteria)
        and has_measured_alcohol(lot)
        and bool(lot.name and lot.name.strip())
    )


def is_lot_eligible(
    lot: ProductionLot, criteria: BottlingCriteria = DEFAULT_BOTTLING_CRITERIA
) -> bool:
    return _passes_base_gates(lot, criteria) and lot.status in criteria.eligible_statuses


def is_lot_nearly_ready(
    lot: ProductionLot, criteria: BottlingCriteria = DEFAULT_BOTTLING_CRITERIA
) -> bool:
    return _passes_base_gates(lot, criteria) and lot.status in criteria.nearly_ready_statuses


def get_lot_blockers(
    lot: ProductionLot, criteria: BottlingCriteria = DEFAULT_BOTTLING_CRITERIA
) -> list[LotBlocker]:
    """Every failing gate, in the order volume, abv, name, status, lab."""
    blockers: list[LotBlocker] = []

    if not has_bottling_volume(lot, criteria):
        blockers.append(
            LotBlocker(
                message=(
                    f"Volume too low: {lot_volume(lot):.1f} gal "
                    f"(min {criteria.min_volume_gallons:g} gal)"
                ),
                type=BlockerType.VOLUME,
                action=BlockerAction(
                    label="View Transfers", path=f"/production/lots/{lot.id}/transfers"
                ),
            )
        )

    if not has_measured_alcohol(lot):
        blockers.append(
            LotBlocker(
                message="ABV not measured (required for labels)",
                type=BlockerType.ABV,
                action=BlockerAction(
                    label="Add Wine Analysis", path=f"/production?view=lab&lot={lot.id}"
                ),
            )
        )

    if not (lot.name and lot.name.strip()):
        blockers.append(
            LotBlocker(
                message="Lot name missing (required for labels)",
                type=BlockerType.NAME,
                action=BlockerAction(
                    label="Edit Lot Details", path=f"/production/lots/{lot.id}/edit"
                ),
            )
        )

    if lot.status in criteria.production_statuses:
        blockers.append(
            LotBlocker(message="Still in production (not aged)", type=BlockerType.STATUS_PRODUCTION)
        )
    elif lot.status in criteria.nearly_ready_statuses:
        blockers.append(
            LotBlocker(
                message=f'Status is "{lot.status.value}" (must be "ready_to_bottle")',
                type=BlockerType.STATUS_NEARLY_READY,
                action=BlockerAction(label="Open Lot Details", path=f"/production/lots/{lot.id}"),
            )
        )

    if not has_lab_data(lot):
        blockers.append(
            LotBlocker(
                message="No lab analysis recorded",
                type=BlockerType.LAB,
                action=BlockerAction(
                    label="Add Lab Test", path=f"/production?view=lab&lot={lot.id}"
                ),
            )
        )

    return blockers
