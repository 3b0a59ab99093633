from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from src.application.use_cases.lots import bottle_lot, list_bottling_candidates
from src.application.use_cases.lots.list_bottling_candidates import CandidateFilter, CandidateSort
from src.domain.services.eligibility import BottlingCriteria
from src.infrastructure.auth.context import AuthContext
from src.infrastructure.db.session import SQLAlchemyUnitOfWork
from src.interfaces.http.deps import get_auth_context, get_bottling_criteria, get_uow
from src.interfaces.http.schemas.bottling import (
    BottleLotRequest,
    BottleLotResponse,
    BottlingCandidateResponse,
    readiness_response,
)
from src.interfaces.http.schemas.lots import LotResponse

router = APIRouter(prefix="/bottling", tags=["bottling"])


@router.get("/candidates", response_model=list[BottlingCandidateResponse])
async def candidates(
    *,
    filter_by: CandidateFilter = Query(CandidateFilter.ALL, alias="filter"),
    sort_by: CandidateSort = Query(CandidateSort.READINESS, alias="sort"),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
    criteria: BottlingCriteria = Depends(get_bottling_criteria),
):
    items = await list_bottling_candidates.execute(
        uow, context.tenant_id, filter_by=filter_by, sort_by=sort_by, criteria=criteria
    )
    return [
        BottlingCandidateResponse(
            lot=LotResponse.model_validate(item.lot), readiness=readiness_response(item)
        )
        for item in items
    ]


@router.post("/lots/{lot_id}", response_model=BottleLotResponse)
async def bottle(
    lot_id: UUID,
    payload: BottleLotRequest,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
    criteria: BottlingCriteria = Depends(get_bottling_criteria),
):
    result = await bottle_lot.execute(
        uow,
        context.tenant_id,
        context.user_id,
        lot_id,
        bottle_lot.BottleLotInput(**payload.model_dump()),
        criteria=criteria,
    )
    return BottleLotResponse(
        lot=LotResponse.model_validate(result.lot),
        bottling_run_id=result.bottling_run_id,
        volume_gallons=result.volume_gallons,
        bulk_transaction_id=result.bulk_transaction.id,
        bottled_transaction_id=result.bottled_transaction.id,
        already_recorded=result.already_recorded,
    )
