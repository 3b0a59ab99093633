from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.value_objects.bond_status import BondStatus
from src.domain.value_objects.lot_status import LotStatus
from src.domain.value_objects.tax_class import TaxClass
from src.domain.value_objects.wine_type import WineType


class LotCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    status: LotStatus = LotStatus.FERMENTING
    varietal: str | None = None
    vintage: int | None = Field(default=None, ge=1900, le=2200)
    wine_type: WineType = WineType.STILL
    is_hard_cider: bool = False
    current_volume_gallons: Decimal = Field(default=Decimal("0"), ge=0)
    current_alcohol_pct: Decimal | None = Field(default=None, ge=0, le=100)
    current_ph: Decimal | None = Field(default=None, ge=0)
    current_ta: Decimal | None = Field(default=None, ge=0)
    aging_start_date: datetime | None = None
    fermentation_end_date: datetime | None = None
    container_name: str | None = None
    bond_status: BondStatus = BondStatus.IN_BOND


class LotUpdate(BaseModel):
    name: str | None = None
    status: LotStatus | None = None
    varietal: str | None = None
    vintage: int | None = Field(default=None, ge=1900, le=2200)
    current_volume_gallons: Decimal | None = Field(default=None, ge=0)
    aging_start_date: datetime | None = None
    fermentation_end_date: datetime | None = None
    container_name: str | None = None


class ChemistryUpdate(BaseModel):
    current_ph: Decimal | None = Field(default=None, ge=0)
    current_ta: Decimal | None = Field(default=None, ge=0)
    current_alcohol_pct: Decimal | None = Field(default=None, ge=0, le=100)


class WineTypeUpdate(BaseModel):
    wine_type: WineType
    is_hard_cider: bool | None = None


class BondStatusUpdate(BaseModel):
    bond_status: BondStatus


class BarrelAssignmentCreate(BaseModel):
    barrel_name: str = Field(min_length=1, max_length=255)
    assigned_at: datetime | None = None


class BarrelAssignmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    lot_id: UUID
    barrel_name: str
    assigned_at: datetime | None


class LotResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    name: str
    status: LotStatus
    varietal: str | None
    vintage: int | None
    wine_type: WineType
    is_hard_cider: bool
    current_volume_gallons: Decimal
    current_alcohol_pct: Decimal | None
    current_ph: Decimal | None
    current_ta: Decimal | None
    aging_start_date: datetime | None
    fermentation_end_date: datetime | None
    container_name: str | None
    barrel_assignments: list[BarrelAssignmentResponse] = []
    ttb_tax_class: TaxClass | None
    tax_class_rules_version: str | None
    bond_status: BondStatus
    archived_at: datetime | None
    created_at: datetime
    updated_at: datetime


class TaxClassChangeResponse(BaseModel):
    old_class: TaxClass
    new_class: TaxClass
    old_label: str
    new_label: str
    warning: str


class ChemistryUpdateResponse(BaseModel):
    lot: LotResponse
    tax_class_change: TaxClassChangeResponse | None = None
