from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.lots import get_lot
from src.domain.models.production_lot import ProductionLot
from src.domain.services.aging import AgingStart, compute_aging_months, get_aging_start_date
from src.domain.services.eligibility import DEFAULT_BOTTLING_CRITERIA, BottlingCriteria
from src.domain.services.readiness import (
    DEFAULT_SCORING_POLICY,
    ReadinessExplanation,
    ScoringPolicy,
    get_readiness_explanation,
)


@dataclass(slots=True)
class LotReadiness:
    lot: ProductionLot
    explanation: ReadinessExplanation
    aging_months: int
    aging_start: AgingStart


def assess(
    lot: ProductionLot,
    *,
    criteria: BottlingCriteria = DEFAULT_BOTTLING_CRITERIA,
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
    now: datetime | None = None,
) -> LotReadiness:
    return LotReadiness(
        lot=lot,
        explanation=get_readiness_explanation(lot, policy, criteria),
        aging_months=compute_aging_months(lot, now=now),
        aging_start=get_aging_start_date(lot),
    )


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    lot_id: UUID,
    *,
    criteria: BottlingCriteria = DEFAULT_BOTTLING_CRITERIA,
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
) -> LotReadiness:
    lot = await get_lot.execute(uow, tenant_id, lot_id)
    return assess(lot, criteria=criteria, policy=policy)
