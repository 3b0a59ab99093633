from __future__ import annotations

import itertools
from decimal import Decimal
from uuid import uuid4

import pytest

from src.domain.models.production_lot import ProductionLot
from src.domain.services.eligibility import (
    BlockerType,
    BottlingCriteria,
    get_lot_blockers,
    is_lot_eligible,
    is_lot_nearly_ready,
)
from src.domain.services.readiness import (
    MAX_SCORE,
    MIN_SCORE,
    compute_readiness,
    get_readiness_explanation,
)
from src.domain.value_objects.lot_status import LotStatus


def make_lot(**overrides) -> ProductionLot:
    values = dict(
        id=uuid4(),
        tenant_id=uuid4(),
        name="2023 Estate Cabernet",
        status=LotStatus.READY_TO_BOTTLE,
        current_volume_gallons=Decimal("60"),
        current_alcohol_pct=Decimal("13.5"),
        current_ph=Decimal("3.6"),
    )
    values.update(overrides)
    return ProductionLot(**values)


def test_ready_lot_is_eligible_and_not_nearly_ready():
    lot = make_lot()
    assert is_lot_eligible(lot)
    assert not is_lot_nearly_ready(lot)
    assert get_lot_blockers(lot) == []


def test_aging_lot_is_nearly_ready_only():
    lot = make_lot(status=LotStatus.AGING)
    assert not is_lot_eligible(lot)
    assert is_lot_nearly_ready(lot)
    blockers = get_lot_blockers(lot)
    assert [b.type for b in blockers] == [BlockerType.STATUS_NEARLY_READY]
    assert blockers[0].action is not None


@pytest.mark.parametrize("status", list(LotStatus))
def test_eligible_and_nearly_ready_never_overlap(status):
    lot = make_lot(status=status)
    assert not (is_lot_eligible(lot) and is_lot_nearly_ready(lot))


def test_fermenting_lot_lists_every_failing_gate_in_order():
    lot = make_lot(
        status=LotStatus.FERMENTING,
        current_volume_gallons=Decimal("5"),
        current_alcohol_pct=None,
        current_ph=None,
    )
    blockers = get_lot_blockers(lot)
    assert [b.type for b in blockers] == [
        BlockerType.VOLUME,
        BlockerType.ABV,
        BlockerType.STATUS_PRODUCTION,
        BlockerType.LAB,
    ]
    assert "5.0 gal" in blockers[0].message
    assert "min 10 gal" in blockers[0].message
    assert blockers[2].action is None


def test_unnamed_fermenting_lot_without_readings_fails_every_gate():
    lot = make_lot(
        name="",
        status=LotStatus.FERMENTING,
        current_volume_gallons=Decimal("5"),
        current_alcohol_pct=Decimal("0"),
        current_ph=None,
    )
    assert [b.type for b in get_lot_blockers(lot)] == [
        BlockerType.VOLUME,
        BlockerType.ABV,
        BlockerType.NAME,
        BlockerType.STATUS_PRODUCTION,
        BlockerType.LAB,
    ]
    assert not is_lot_eligible(lot)


@pytest.mark.parametrize(
    "volume, abv, name, ph",
    list(
        itertools.product(
            [None, "0", "9.99", "10", "250"],
            [None, "0", "0.5", "13.5"],
            ["", "  ", "Old Vine Zin"],
            [None, "3.4"],
        )
    ),
)
def test_ready_lot_has_no_blockers_exactly_when_eligible(volume, abv, name, ph):
    lot = make_lot(
        name=name,
        current_volume_gallons=Decimal(volume) if volume is not None else None,
        current_alcohol_pct=Decimal(abv) if abv is not None else None,
        current_ph=Decimal(ph) if ph is not None else None,
    )
    assert (get_lot_blockers(lot) == []) == is_lot_eligible(lot)


@pytest.mark.parametrize(
    "status", [LotStatus.CRUSHING, LotStatus.FERMENTING, LotStatus.PRESSING]
)
def test_production_statuses_report_still_in_production(status):
    blockers = get_lot_blockers(make_lot(status=status))
    assert [b.type for b in blockers] == [BlockerType.STATUS_PRODUCTION]


def test_blank_name_blocks_bottling():
    lot = make_lot(name="   ")
    assert not is_lot_eligible(lot)
    assert [b.type for b in get_lot_blockers(lot)] == [BlockerType.NAME]


def test_zero_abv_counts_as_unmeasured():
    lot = make_lot(current_alcohol_pct=Decimal("0"))
    assert not is_lot_eligible(lot)
    assert BlockerType.ABV in {b.type for b in get_lot_blockers(lot)}


def test_volume_threshold_is_configurable():
    lot = make_lot(current_volume_gallons=Decimal("8"))
    assert not is_lot_eligible(lot)
    assert is_lot_eligible(lot, BottlingCriteria(min_volume_gallons=Decimal("5")))


def test_overlapping_status_sets_are_rejected():
    with pytest.raises(ValueError):
        BottlingCriteria(
            eligible_statuses=frozenset({LotStatus.AGING}),
            nearly_ready_statuses=frozenset({LotStatus.AGING}),
        )


def test_ready_lot_scores_at_least_80():
    lot = make_lot(container_name=None)
    assert compute_readiness(lot) >= 80


def test_score_is_clamped_to_bounds():
    full = make_lot(container_name="Tank 4", current_ta=Decimal("6.2"))
    assert compute_readiness(full) == MAX_SCORE
    empty = make_lot(
        status=LotStatus.CRUSHING,
        current_volume_gallons=Decimal("0"),
        current_alcohol_pct=None,
        current_ph=None,
    )
    assert compute_readiness(empty) == MIN_SCORE


@pytest.mark.parametrize(
    "status,volume,abv,ph,container",
    list(
        itertools.product(
            list(LotStatus),
            [Decimal("0"), Decimal("9.9"), Decimal("10"), Decimal("500")],
            [None, Decimal("0"), Decimal("12.5")],
            [None, Decimal("3.4")],
            [None, "Barrel 12"],
        )
    ),
)
def test_score_stays_in_range(status, volume, abv, ph, container):
    lot = make_lot(
        status=status,
        current_volume_gallons=volume,
        current_alcohol_pct=abv,
        current_ph=ph,
        container_name=container,
    )
    assert MIN_SCORE <= compute_readiness(lot) <= MAX_SCORE


def test_explanation_breakdown_and_flags():
    lot = make_lot(status=LotStatus.BLENDING, container_name="Tank 2")
    explanation = get_readiness_explanation(lot)
    assert explanation.breakdown[0] == "✓ Volume OK: 60.0 gal"
    assert explanation.breakdown[1] == "✓ ABV measured: 13.5%"
    assert explanation.breakdown[2] == "○ Status: blending (nearly ready)"
    assert explanation.breakdown[-1] == "✓ Container: Tank 2"
    assert explanation.nearly_ready
    assert not explanation.eligible
    assert explanation.policy_version == "2024.1"
