from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from src.application.use_cases.lots import (
    add_barrel_assignment,
    archive_lot,
    create_lot,
    get_lot,
    get_readiness,
    list_lots,
    recalculate_tax_class,
    update_bond_status,
    update_chemistry,
    update_lot,
    update_wine_type,
)
from src.application.use_cases.ttb import list_transactions
from src.domain.services.eligibility import BottlingCriteria
from src.domain.value_objects.lot_status import LotStatus
from src.infrastructure.auth.context import AuthContext
from src.infrastructure.db.session import SQLAlchemyUnitOfWork
from src.interfaces.http.deps import get_auth_context, get_bottling_criteria, get_uow
from src.interfaces.http.schemas.bottling import ReadinessResponse, readiness_response
from src.interfaces.http.schemas.lots import (
    BarrelAssignmentCreate,
    BarrelAssignmentResponse,
    BondStatusUpdate,
    ChemistryUpdate,
    ChemistryUpdateResponse,
    LotCreate,
    LotResponse,
    LotUpdate,
    TaxClassChangeResponse,
    WineTypeUpdate,
)
from src.interfaces.http.schemas.ttb import TransactionResponse

router = APIRouter(prefix="/lots", tags=["lots"])


@router.get("/", response_model=list[LotResponse])
async def list_all(
    *,
    include_archived: bool = Query(False),
    lot_status: LotStatus | None = Query(None, alias="status"),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    lots = await list_lots.execute(
        uow, context.tenant_id, include_archived=include_archived, status=lot_status
    )
    return [LotResponse.model_validate(lot) for lot in lots]


@router.post("/", response_model=LotResponse, status_code=status.HTTP_201_CREATED)
async def create(
    payload: LotCreate,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    lot = await create_lot.execute(
        uow, context.tenant_id, create_lot.CreateLotInput(**payload.model_dump())
    )
    return LotResponse.model_validate(lot)


@router.get("/{lot_id}", response_model=LotResponse)
async def get_one(
    lot_id: UUID,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    return LotResponse.model_validate(await get_lot.execute(uow, context.tenant_id, lot_id))


@router.patch("/{lot_id}", response_model=LotResponse)
async def update(
    lot_id: UUID,
    payload: LotUpdate,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    lot = await update_lot.execute(
        uow,
        context.tenant_id,
        context.user_id,
        lot_id,
        update_lot.UpdateLotInput(**payload.model_dump(exclude_unset=True)),
    )
    return LotResponse.model_validate(lot)


@router.post("/{lot_id}/archive", response_model=LotResponse)
async def archive(
    lot_id: UUID,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    return LotResponse.model_validate(await archive_lot.execute(uow, context.tenant_id, lot_id))


@router.post(
    "/{lot_id}/barrels",
    response_model=BarrelAssignmentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def assign_barrel(
    lot_id: UUID,
    payload: BarrelAssignmentCreate,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    assignment = await add_barrel_assignment.execute(
        uow,
        context.tenant_id,
        lot_id,
        add_barrel_assignment.AddBarrelAssignmentInput(**payload.model_dump()),
    )
    return BarrelAssignmentResponse.model_validate(assignment)


@router.put("/{lot_id}/chemistry", response_model=ChemistryUpdateResponse)
async def set_chemistry(
    lot_id: UUID,
    payload: ChemistryUpdate,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    result = await update_chemistry.execute(
        uow,
        context.tenant_id,
        lot_id,
        update_chemistry.UpdateChemistryInput(**payload.model_dump()),
    )
    change = result.tax_class_change
    return ChemistryUpdateResponse(
        lot=LotResponse.model_validate(result.lot),
        tax_class_change=(
            TaxClassChangeResponse(
                old_class=change.old_class,
                new_class=change.new_class,
                old_label=change.old_label,
                new_label=change.new_label,
                warning=change.warning,
            )
            if change
            else None
        ),
    )


@router.put("/{lot_id}/wine-type", response_model=LotResponse)
async def set_wine_type(
    lot_id: UUID,
    payload: WineTypeUpdate,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    lot = await update_wine_type.execute(
        uow,
        context.tenant_id,
        lot_id,
        update_wine_type.UpdateWineTypeInput(**payload.model_dump()),
    )
    return LotResponse.model_validate(lot)


@router.put("/{lot_id}/bond-status", response_model=LotResponse)
async def set_bond_status(
    lot_id: UUID,
    payload: BondStatusUpdate,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    lot = await update_bond_status.execute(uow, context.tenant_id, lot_id, payload.bond_status)
    return LotResponse.model_validate(lot)


@router.post("/{lot_id}/tax-class/recalculate", response_model=LotResponse)
async def recalculate(
    lot_id: UUID,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    lot = await recalculate_tax_class.execute(uow, context.tenant_id, lot_id)
    return LotResponse.model_validate(lot)


@router.get("/{lot_id}/readiness", response_model=ReadinessResponse)
async def readiness(
    lot_id: UUID,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
    criteria: BottlingCriteria = Depends(get_bottling_criteria),
):
    item = await get_readiness.execute(uow, context.tenant_id, lot_id, criteria=criteria)
    return readiness_response(item)


@router.get("/{lot_id}/ttb-transactions", response_model=list[TransactionResponse])
async def lot_transactions(
    lot_id: UUID,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    await get_lot.execute(uow, context.tenant_id, lot_id)
    items = await list_transactions.execute(uow, context.tenant_id, lot_id=lot_id, limit=None)
    return [TransactionResponse.model_validate(tx) for tx in items]
