"""Advisory bottling readiness score (0-100) and its explanation.

The score is a heuristic used for sorting and display, never for authorization.
UI score bands depend on the weights below, so any reweighting must ship as a new
``ScoringPolicy`` version.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.domain.models.production_lot import ProductionLot
from src.domain.services.eligibility import (
    DEFAULT_BOTTLING_CRITERIA,
    BottlingCriteria,
    LotBlocker,
    get_lot_blockers,
    has_bottling_volume,
    has_lab_data,
    has_measured_alcohol,
    is_lot_eligible,
    is_lot_nearly_ready,
    lot_volume,
)
from src.domain.value_objects.lot_status import LotStatus

MIN_SCORE = 0
MAX_SCORE = 100


@dataclass(slots=True, frozen=True)
class ScoringPolicy:
    version: str = "2024.1"
    baseline: int = 50
    low_volume_penalty: int = -30
    volume_ok_bonus: int = 10
    missing_abv_penalty: int = -20
    abv_ok_bonus: int = 10
    status_bonus: dict[LotStatus, int] = field(
        default_factory=lambda: {
            LotStatus.READY_TO_BOTTLE: 20,
            LotStatus.AGING: 10,
            LotStatus.BLENDING: 5,
        }
    )
    lab_data_bonus: int = 10
    missing_lab_penalty: int = -10
    container_bonus: int = 5


DEFAULT_SCORING_POLICY = ScoringPolicy()


@dataclass(slots=True)
class ReadinessExplanation:
    score: int
    breakdown: list[str]
    blockers: list[LotBlocker]
    eligible: bool
    nearly_ready: bool
    policy_version: str


def compute_readiness(
    lot: ProductionLot,
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
    criteria: BottlingCriteria = DEFAULT_BOTTLING_CRITERIA,
) -> int:
    score = policy.baseline

    if has_bottling_volume(lot, criteria):
        score += policy.volume_ok_bonus
    else:
        score += policy.low_volume_penalty

    if has_measured_alcohol(lot):
        score += policy.abv_ok_bonus
    else:
        score += policy.missing_abv_penalty

    score += policy.status_bonus.get(lot.status, 0)

    if has_lab_data(lot):
        score += policy.lab_data_bonus
    else:
        score += policy.missing_lab_penalty

    if lot.container_name:
        score += policy.container_bonus

    return max(MIN_SCORE, min(MAX_SCORE, score))


def _lab_values(lot: ProductionLot) -> list[str]:
    values = []
    if lot.current_ph:
        values.append(f"pH: {lot.current_ph}")
    if lot.current_ta:
        values.append(f"TA: {lot.current_ta}")
    if lot.current_alcohol_pct:
        values.append(f"ABV: {lot.current_alcohol_pct}%")
    return values


def get_readiness_explanation(
    lot: ProductionLot,
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
    criteria: BottlingCriteria = DEFAULT_BOTTLING_CRITERIA,
) -> ReadinessExplanation:
    breakdown: list[str] = []

    volume = lot_volume(lot)
    if has_bottling_volume(lot, criteria):
        breakdown.append(f"✓ Volume OK: {volume:.1f} gal")
    else:
        breakdown.append(f"✗ Volume too low: {volume:.1f} gal")

    if has_measured_alcohol(lot):
        breakdown.append(f"✓ ABV measured: {lot.current_alcohol_pct:.1f}%")
    else:
        breakdown.append("✗ ABV not measured")

    if lot.status in criteria.eligible_statuses:
        breakdown.append(f"✓ Status: {lot.status.value}")
    elif lot.status in criteria.nearly_ready_statuses:
        breakdown.append(f"○ Status: {lot.status.value} (nearly ready)")
    else:
        breakdown.append(f"✗ Status: {lot.status.value}")

    if has_lab_data(lot):
        breakdown.append(f"✓ Lab data: {', '.join(_lab_values(lot))}")
    else:
        breakdown.append("○ No lab analysis recorded")

    if lot.container_name:
        breakdown.append(f"✓ Container: {lot.container_name}")

    return ReadinessExplanation(
        score=compute_readiness(lot, policy, criteria),
        breakdown=breakdown,
        blockers=get_lot_blockers(lot, criteria),
        eligible=is_lot_eligible(lot, criteria),
        nearly_ready=is_lot_nearly_ready(lot, criteria),
        policy_version=policy.version,
    )
