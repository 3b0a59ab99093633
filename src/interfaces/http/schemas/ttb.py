from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.services.reporting_periods import PeriodType
from src.domain.value_objects.bond_status import BondStatus
from src.domain.value_objects.report_status import ReportStatus
from src.domain.value_objects.tax_class import TaxClass
from src.domain.value_objects.transaction_type import TransactionType


class TransactionCreate(BaseModel):
    transaction_type: TransactionType
    tax_class: TaxClass
    volume_gallons: Decimal = Field(gt=0)
    transaction_date: date | None = None
    lot_id: UUID | None = None
    container_id: UUID | None = None
    bond_status: BondStatus | None = None
    notes: str | None = Field(default=None, max_length=1024)


class TransactionUpdate(BaseModel):
    transaction_type: TransactionType | None = None
    tax_class: TaxClass | None = None
    volume_gallons: Decimal | None = Field(default=None, gt=0)
    transaction_date: date | None = None
    bond_status: BondStatus | None = None
    notes: str | None = Field(default=None, max_length=1024)


class TransactionLog(BaseModel):
    source_event_type: str = Field(min_length=1, max_length=64)
    source_event_id: UUID
    transaction_type: TransactionType
    tax_class: TaxClass
    volume_gallons: Decimal = Field(gt=0)
    lot_id: UUID | None = None
    container_id: UUID | None = None
    bottling_run_id: UUID | None = None
    bond_status: BondStatus | None = None
    transaction_date: date | None = None
    notes: str | None = Field(default=None, max_length=1024)


class TransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    transaction_type: TransactionType
    tax_class: TaxClass
    volume_gallons: Decimal
    transaction_date: date
    lot_id: UUID | None
    container_id: UUID | None
    bottling_run_id: UUID | None
    bond_status: BondStatus | None
    source_event_type: str | None
    source_event_id: UUID | None
    notes: str | None
    created_by: UUID | None
    created_at: datetime


class TransactionLogResponse(BaseModel):
    transaction: TransactionResponse
    created: bool


class ReportGenerateRequest(BaseModel):
    period_start: date
    period_end: date
    period_type: PeriodType = PeriodType.MONTHLY


class ReportSaveRequest(ReportGenerateRequest):
    report_data: dict[str, Any] | None = None


class ReportStatusUpdate(BaseModel):
    status: ReportStatus
    confirmation_number: str | None = Field(default=None, max_length=64)


class ReportPeriodResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    period_start: date
    period_end: date
    period_type: str
    status: ReportStatus
    report_data: dict[str, Any] | None
    submitted_at: datetime | None
    submitted_by: UUID | None
    confirmation_number: str | None
    created_at: datetime
    updated_at: datetime


class ReportExportRequest(ReportGenerateRequest):
    format: Literal["pdf", "json"] = "pdf"


class ReportExportResponse(BaseModel):
    report_id: str
    title: str
    generated_at: str
    format: str
    content: str | None = None  # base64 for PDF, JSON for data
    data: dict[str, Any] | None = None  # structured data when format=json
    file_name: str | None = None


class BatchTaxClassResponse(BaseModel):
    examined: int
    updated: int
    rules_version: str
    changes: dict[str, TaxClass]


class BulkInventoryLineResponse(BaseModel):
    in_bond: Decimal
    taxpaid: Decimal
    total: Decimal
    lot_count: int


class BulkInventoryResponse(BaseModel):
    total_gallons: Decimal
    by_tax_class: dict[TaxClass, BulkInventoryLineResponse]


class FermentationVolumeResponse(BaseModel):
    volume_gallons: Decimal
    lot_count: int


class RegistrationPayload(BaseModel):
    operated_by: str
    ein: str
    registry_number: str
    premises_address: str
    premises_city: str
    premises_state: str
    premises_zip: str
    trade_name: str | None = None


class RegistrationResponse(RegistrationPayload):
    model_config = ConfigDict(from_attributes=True)
    updated_at: datetime


class ReportingPeriodResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    value: str
    label: str
    start: date
    end: date


class TaxClassInfo(BaseModel):
    value: TaxClass
    label: str
    short_label: str
    column: str


class WineTypeInfo(BaseModel):
    value: str
    label: str


class TransactionTypeInfo(BaseModel):
    value: TransactionType
    label: str
    section: str
    direction: str
    line: int
    form_line: str


class ConversionResponse(BaseModel):
    gallons: Decimal
    liters: Decimal
