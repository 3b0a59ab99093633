from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from src.interfaces.http.schemas.lots import LotResponse


class BlockerActionResponse(BaseModel):
    label: str
    type: str
    path: str


class BlockerResponse(BaseModel):
    message: str
    type: str
    action: BlockerActionResponse | None = None


class AgingStartResponse(BaseModel):
    date: datetime | None
    source: str | None
    is_unknown: bool


class ReadinessResponse(BaseModel):
    lot_id: UUID
    score: int
    breakdown: list[str]
    blockers: list[BlockerResponse]
    eligible: bool
    nearly_ready: bool
    policy_version: str
    aging_months: int
    aging_start: AgingStartResponse


class BottlingCandidateResponse(BaseModel):
    lot: LotResponse
    readiness: ReadinessResponse


class BottleLotRequest(BaseModel):
    volume_gallons: Decimal | None = Field(default=None, gt=0)
    bottle_count: int | None = Field(default=None, gt=0)
    bottle_size_ml: int = Field(default=750, gt=0)
    bottling_run_id: UUID | None = None
    bottled_on: date | None = None
    label_name: str | None = None


class BottleLotResponse(BaseModel):
    lot: LotResponse
    bottling_run_id: UUID
    volume_gallons: Decimal
    bulk_transaction_id: UUID
    bottled_transaction_id: UUID
    already_recorded: bool


def readiness_response(item) -> ReadinessResponse:
    """Build from a ``get_readiness.LotReadiness``."""
    explanation = item.explanation
    return ReadinessResponse(
        lot_id=item.lot.id,
        score=explanation.score,
        breakdown=list(explanation.breakdown),
        blockers=[
            BlockerResponse(
                message=b.message,
                type=b.type.value,
                action=(
                    BlockerActionResponse(label=b.action.label, type=b.action.type, path=b.action.path)
                    if b.action
                    else None
                ),
            )
            for b in explanation.blockers
        ],
        eligible=explanation.eligible,
        nearly_ready=explanation.nearly_ready,
        policy_version=explanation.policy_version,
        aging_months=item.aging_months,
        aging_start=AgingStartResponse(
            date=item.aging_start.date,
            source=item.aging_start.source.value if item.aging_start.source else None,
            is_unknown=item.aging_start.is_unknown,
        ),
    )
