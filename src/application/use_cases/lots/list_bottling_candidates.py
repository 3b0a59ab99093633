from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.lots.get_readiness import LotReadiness, assess
from src.domain.services.eligibility import DEFAULT_BOTTLING_CRITERIA, BottlingCriteria
from src.domain.services.readiness import DEFAULT_SCORING_POLICY, ScoringPolicy
from src.domain.value_objects.lot_status import LotStatus


class CandidateFilter(str, Enum):
    ALL = "all"
    ELIGIBLE = "eligible"
    AGING = "aging"
    BLOCKED = "blocked"


class CandidateSort(str, Enum):
    READINESS = "readiness"
    AGING = "aging"
    VINTAGE = "vintage"
    VOLUME = "volume"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"


def _matches(item: LotReadiness, filter_by: CandidateFilter) -> bool:
    if filter_by is CandidateFilter.ELIGIBLE:
        return item.explanation.eligible
    if filter_by is CandidateFilter.AGING:
        return item.lot.status is LotStatus.AGING
    if filter_by is CandidateFilter.BLOCKED:
        return not item.explanation.eligible
    return True


def _sort(items: list[LotReadiness], sort_by: CandidateSort) -> list[LotReadiness]:
    if sort_by is CandidateSort.AGING:
        return sorted(items, key=lambda i: i.aging_months, reverse=True)
    if sort_by is CandidateSort.VINTAGE:
        return sorted(items, key=lambda i: i.lot.vintage or 0, reverse=True)
    if sort_by is CandidateSort.VOLUME:
        return sorted(items, key=lambda i: i.lot.current_volume_gallons or 0, reverse=True)
    if sort_by is CandidateSort.NAME_ASC:
        return sorted(items, key=lambda i: (i.lot.name or "").lower())
    if sort_by is CandidateSort.NAME_DESC:
        return sorted(items, key=lambda i: (i.lot.name or "").lower(), reverse=True)
    return sorted(items, key=lambda i: i.explanation.score, reverse=True)


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    *,
    filter_by: CandidateFilter | str = CandidateFilter.ALL,
    sort_by: CandidateSort | str = CandidateSort.READINESS,
    criteria: BottlingCriteria = DEFAULT_BOTTLING_CRITERIA,
    policy: ScoringPolicy = DEFAULT_SCORING_POLICY,
    now: datetime | None = None,
) -> list[LotReadiness]:
    try:
        filter_by = CandidateFilter(filter_by)
        sort_by = CandidateSort(sort_by)
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc

    lots = await uow.lots.list(tenant_id, exclude_statuses=[LotStatus.BOTTLED])
    assessed = [assess(lot, criteria=criteria, policy=policy, now=now) for lot in lots]
    return _sort([item for item in assessed if _matches(item, filter_by)], sort_by)
