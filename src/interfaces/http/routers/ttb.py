from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Literal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from src.application.errors import ValidationError
from src.application.use_cases.ttb import (
    batch_update_lot_tax_classes,
    create_transaction,
    delete_registration,
    delete_report,
    delete_transaction,
    generate_report,
    get_active_fermentations,
    get_bulk_inventory,
    get_registration,
    get_report,
    get_transaction,
    list_reports,
    list_transactions,
    log_ttb_transaction,
    save_registration,
    save_report,
    update_report_status,
    update_transaction,
    volumes_by_tax_class,
)
from src.config.settings import Settings
from src.domain.services import conversions
from src.domain.services.reporting_periods import PeriodType, get_available_periods
from src.domain.value_objects.report_status import ReportStatus
from src.domain.value_objects.tax_class import TAX_CLASS_ORDER, TaxClass
from src.domain.value_objects.transaction_type import TransactionType
from src.domain.value_objects.wine_type import WineType
from src.infrastructure.auth.context import AuthContext
from src.infrastructure.db.session import SQLAlchemyUnitOfWork
from src.infrastructure.reports.report_service import ReportService
from src.interfaces.http.deps import (
    get_app_settings,
    get_auth_context,
    get_report_service,
    get_uow,
)
from src.interfaces.http.schemas.ttb import (
    BatchTaxClassResponse,
    BulkInventoryLineResponse,
    BulkInventoryResponse,
    ConversionResponse,
    FermentationVolumeResponse,
    RegistrationPayload,
    RegistrationResponse,
    ReportExportRequest,
    ReportExportResponse,
    ReportGenerateRequest,
    ReportingPeriodResponse,
    ReportPeriodResponse,
    ReportSaveRequest,
    ReportStatusUpdate,
    TaxClassInfo,
    TransactionCreate,
    TransactionLog,
    TransactionLogResponse,
    TransactionResponse,
    TransactionTypeInfo,
    TransactionUpdate,
    WineTypeInfo,
)

router = APIRouter(prefix="/ttb", tags=["ttb"])


# Reference data


@router.get("/reference/tax-classes", response_model=list[TaxClassInfo])
async def tax_classes(context: AuthContext = Depends(get_auth_context)):
    return [
        TaxClassInfo(value=tc, label=tc.label, short_label=tc.short_label, column=tc.column)
        for tc in TAX_CLASS_ORDER
    ]


@router.get("/reference/wine-types", response_model=list[WineTypeInfo])
async def wine_types(context: AuthContext = Depends(get_auth_context)):
    return [WineTypeInfo(value=wt.value, label=wt.label) for wt in WineType]


@router.get("/reference/transaction-types", response_model=list[TransactionTypeInfo])
async def transaction_types(context: AuthContext = Depends(get_auth_context)):
    return [
        TransactionTypeInfo(
            value=tt,
            label=tt.label,
            section=tt.section.value,
            direction=tt.direction.value,
            line=tt.line,
            form_line=tt.form_line,
        )
        for tt in TransactionType
    ]


@router.get("/periods", response_model=list[ReportingPeriodResponse])
async def periods(
    period_type: PeriodType = Query(PeriodType.MONTHLY),
    years_back: int = Query(2, ge=0, le=10),
    context: AuthContext = Depends(get_auth_context),
):
    return [
        ReportingPeriodResponse.model_validate(p)
        for p in get_available_periods(period_type, years_back)
    ]


@router.get("/conversions", response_model=ConversionResponse)
async def convert(
    value: Decimal = Query(..., ge=0),
    unit: Literal["gallons", "liters", "bottles", "cases"] = Query("gallons"),
    bottle_ml: int = Query(conversions.DEFAULT_BOTTLE_ML, gt=0),
    bottles_per_case: int = Query(conversions.DEFAULT_BOTTLES_PER_CASE, gt=0),
    context: AuthContext = Depends(get_auth_context),
):
    if unit == "gallons":
        gallons = value
    elif unit == "liters":
        gallons = conversions.liters_to_gallons(value)
    else:
        if value != value.to_integral_value():
            raise ValidationError(f"{unit} must be a whole number")
        if unit == "bottles":
            gallons = conversions.bottles_to_gallons(int(value), bottle_ml)
        else:
            gallons = conversions.cases_to_gallons(int(value), bottles_per_case, bottle_ml)
    return ConversionResponse(
        gallons=round(gallons, 4), liters=round(conversions.gallons_to_liters(gallons), 4)
    )


# Ledger


@router.get("/transactions", response_model=list[TransactionResponse])
async def list_all_transactions(
    *,
    date_from: date | None = Query(None),
    date_to: date | None = Query(None),
    transaction_type: TransactionType | None = Query(None),
    tax_class: TaxClass | None = Query(None),
    lot_id: UUID | None = Query(None),
    limit: int = Query(list_transactions.DEFAULT_LIMIT, ge=1, le=list_transactions.MAX_LIMIT),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    items = await list_transactions.execute(
        uow,
        context.tenant_id,
        date_from=date_from,
        date_to=date_to,
        transaction_type=transaction_type,
        tax_class=tax_class,
        lot_id=lot_id,
        limit=limit,
    )
    return [TransactionResponse.model_validate(tx) for tx in items]


@router.post(
    "/transactions", response_model=TransactionResponse, status_code=status.HTTP_201_CREATED
)
async def create_one_transaction(
    payload: TransactionCreate,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    tx = await create_transaction.execute(
        uow,
        context.tenant_id,
        context.user_id,
        create_transaction.CreateTransactionInput(**payload.model_dump()),
    )
    return TransactionResponse.model_validate(tx)


@router.post("/transactions/log", response_model=TransactionLogResponse)
async def log_transaction(
    payload: TransactionLog,
    response: Response,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    result = await log_ttb_transaction.execute(
        uow,
        context.tenant_id,
        context.user_id,
        log_ttb_transaction.LogTTBTransactionInput(**payload.model_dump()),
    )
    response.status_code = status.HTTP_201_CREATED if result.created else status.HTTP_200_OK
    return TransactionLogResponse(
        transaction=TransactionResponse.model_validate(result.transaction), created=result.created
    )


@router.get("/transactions/volumes", response_model=dict[str, Decimal])
async def volumes(
    *,
    date_from: date = Query(...),
    date_to: date = Query(...),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    return await volumes_by_tax_class.execute(uow, context.tenant_id, date_from, date_to)


@router.get("/transactions/{transaction_id}", response_model=TransactionResponse)
async def get_one_transaction(
    transaction_id: UUID,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    tx = await get_transaction.execute(uow, context.tenant_id, transaction_id)
    return TransactionResponse.model_validate(tx)


@router.patch("/transactions/{transaction_id}", response_model=TransactionResponse)
async def update_one_transaction(
    transaction_id: UUID,
    payload: TransactionUpdate,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    tx = await update_transaction.execute(
        uow,
        context.tenant_id,
        transaction_id,
        update_transaction.UpdateTransactionInput(**payload.model_dump(exclude_unset=True)),
    )
    return TransactionResponse.model_validate(tx)


@router.delete("/transactions/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_one_transaction(
    transaction_id: UUID,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    await delete_transaction.execute(uow, context.tenant_id, transaction_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# Reports


@router.post("/reports/generate", response_model=dict[str, Any])
async def generate(
    payload: ReportGenerateRequest,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
    settings: Settings = Depends(get_app_settings),
):
    report = await generate_report.execute(
        uow,
        context.tenant_id,
        payload.period_start,
        payload.period_end,
        period_type=payload.period_type,
    )
    return report.to_dict(settings.report_rounding_digits)


@router.post("/reports/export", response_model=ReportExportResponse)
async def export(
    payload: ReportExportRequest,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
    settings: Settings = Depends(get_app_settings),
    report_service: ReportService = Depends(get_report_service),
):
    report = await generate_report.execute(
        uow,
        context.tenant_id,
        payload.period_start,
        payload.period_end,
        period_type=payload.period_type,
    )
    registration = await get_registration.execute(uow, context.tenant_id)
    return report_service.export(
        report.to_dict(settings.report_rounding_digits),
        registration=registration,
        fmt=payload.format,
    )


@router.get("/reports", response_model=list[ReportPeriodResponse])
async def list_saved_reports(
    *,
    report_status: ReportStatus | None = Query(None, alias="status"),
    year: int | None = Query(None, ge=1900, le=2200),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    items = await list_reports.execute(uow, context.tenant_id, status=report_status, year=year)
    return [ReportPeriodResponse.model_validate(r) for r in items]


@router.post("/reports", response_model=ReportPeriodResponse)
async def save(
    payload: ReportSaveRequest,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
    settings: Settings = Depends(get_app_settings),
):
    report = await save_report.execute(
        uow,
        context.tenant_id,
        save_report.SaveReportInput(**payload.model_dump()),
        rounding_digits=settings.report_rounding_digits,
    )
    return ReportPeriodResponse.model_validate(report)


@router.get("/reports/by-period", response_model=ReportPeriodResponse)
async def get_by_period(
    *,
    period_start: date = Query(...),
    period_end: date = Query(...),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    report = await get_report.by_period(uow, context.tenant_id, period_start, period_end)
    return ReportPeriodResponse.model_validate(report)


@router.get("/reports/{report_id}", response_model=ReportPeriodResponse)
async def get_saved_report(
    report_id: UUID,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    report = await get_report.execute(uow, context.tenant_id, report_id)
    return ReportPeriodResponse.model_validate(report)


@router.patch("/reports/{report_id}/status", response_model=ReportPeriodResponse)
async def change_status(
    report_id: UUID,
    payload: ReportStatusUpdate,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    report = await update_report_status.execute(
        uow,
        context.tenant_id,
        context.user_id,
        report_id,
        payload.status,
        confirmation_number=payload.confirmation_number,
    )
    return ReportPeriodResponse.model_validate(report)


@router.delete("/reports/{report_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_saved_report(
    report_id: UUID,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    await delete_report.execute(uow, context.tenant_id, report_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/reports/{report_id}/export", response_model=ReportExportResponse)
async def export_saved_report(
    report_id: UUID,
    *,
    fmt: Literal["pdf", "json"] = Query("pdf", alias="format"),
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
    report_service: ReportService = Depends(get_report_service),
):
    report = await get_report.execute(uow, context.tenant_id, report_id)
    if not report.report_data:
        raise ValidationError("Saved report has no data to export")
    registration = await get_registration.execute(uow, context.tenant_id)
    return report_service.export(report.report_data, registration=registration, fmt=fmt)


# Tax classes and inventory


@router.post("/tax-classes/recalculate", response_model=BatchTaxClassResponse)
async def recalculate_all(
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    result = await batch_update_lot_tax_classes.execute(uow, context.tenant_id)
    return BatchTaxClassResponse(
        examined=result.examined,
        updated=result.updated,
        rules_version=result.rules_version,
        changes={str(lot_id): tc for lot_id, tc in result.changes.items()},
    )


@router.get("/inventory/bulk", response_model=BulkInventoryResponse)
async def bulk_inventory(
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    inventory = await get_bulk_inventory.execute(uow, context.tenant_id)
    return BulkInventoryResponse(
        total_gallons=inventory.total_gallons,
        by_tax_class={
            tc: BulkInventoryLineResponse(
                in_bond=line.in_bond,
                taxpaid=line.taxpaid,
                total=line.total,
                lot_count=line.lot_count,
            )
            for tc, line in inventory.by_tax_class.items()
        },
    )


@router.get("/inventory/fermentations", response_model=dict[TaxClass, FermentationVolumeResponse])
async def active_fermentations(
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    volumes = await get_active_fermentations.execute(uow, context.tenant_id)
    return {
        tc: FermentationVolumeResponse(volume_gallons=v.volume_gallons, lot_count=v.lot_count)
        for tc, v in volumes.items()
    }


# Winery registration


@router.get("/registration", response_model=RegistrationResponse | None)
async def read_registration(
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    registration = await get_registration.execute(uow, context.tenant_id)
    if registration is None:
        return None
    return RegistrationResponse.model_validate(registration)


@router.put("/registration", response_model=RegistrationResponse)
async def write_registration(
    payload: RegistrationPayload,
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    registration = await save_registration.execute(
        uow, context.tenant_id, save_registration.SaveRegistrationInput(**payload.model_dump())
    )
    return RegistrationResponse.model_validate(registration)


@router.delete("/registration", status_code=status.HTTP_204_NO_CONTENT)
async def remove_registration(
    *,
    uow: SQLAlchemyUnitOfWork = Depends(get_uow),
    context: AuthContext = Depends(get_auth_context),
):
    await delete_registration.execute(uow, context.tenant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
