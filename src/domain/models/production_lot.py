from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from src.domain.value_objects.bond_status import BondStatus
from src.domain.value_objects.lot_status import LotStatus
from src.domain.value_objects.tax_class import TaxClass
from src.domain.value_objects.wine_type import WineType


@dataclass(slots=True)
class BarrelAssignment:
    id: UUID
    lot_id: UUID
    barrel_name: str
    assigned_at: datetime | None

    @classmethod
    def create(cls, lot_id: UUID, barrel_name: str, assigned_at: datetime) -> BarrelAssignment:
        if assigned_at.tzinfo is None:
            assigned_at = assigned_at.replace(tzinfo=timezone.utc)
        return cls(id=uuid4(), lot_id=lot_id, barrel_name=barrel_name, assigned_at=assigned_at)


@dataclass(slots=True)
class ProductionLot:
    id: UUID
    tenant_id: UUID
    name: str
    status: LotStatus = LotStatus.FERMENTING
    varietal: str | None = None
    vintage: int | None = None
    wine_type: WineType = WineType.STILL
    is_hard_cider: bool = False
    current_volume_gallons: Decimal = Decimal("0")
    # None means "not measured"; scoring also treats 0 as unmeasured
    current_alcohol_pct: Decimal | None = None
    current_ph: Decimal | None = None
    current_ta: Decimal | None = None
    aging_start_date: datetime | None = None
    fermentation_end_date: datetime | None = None
    container_name: str | None = None
    barrel_assignments: list[BarrelAssignment] = field(default_factory=list)
    ttb_tax_class: TaxClass | None = None
    tax_class_rules_version: str | None = None
    bond_status: BondStatus = BondStatus.IN_BOND
    archived_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_archived(self) -> bool:
        return self.archived_at is not None

    @classmethod
    def create(
        cls,
        *,
        tenant_id: UUID,
        name: str,
        status: LotStatus = LotStatus.FERMENTING,
        varietal: str | None = None,
        vintage: int | None = None,
        wine_type: WineType = WineType.STILL,
        is_hard_cider: bool = False,
        current_volume_gallons: Decimal = Decimal("0"),
        current_alcohol_pct: Decimal | None = None,
        current_ph: Decimal | None = None,
        current_ta: Decimal | None = None,
        aging_start_date: datetime | None = None,
        fermentation_end_date: datetime | None = None,
        container_name: str | None = None,
        bond_status: BondStatus = BondStatus.IN_BOND,
    ) -> ProductionLot:
        if current_volume_gallons < 0:
            raise ValueError("current_volume_gallons must not be negative")
        if current_alcohol_pct is not None and current_alcohol_pct < 0:
            raise ValueError("current_alcohol_pct must not be negative")
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            tenant_id=tenant_id,
            name=name,
            status=status,
            varietal=varietal,
            vintage=vintage,
            wine_type=wine_type,
            is_hard_cider=is_hard_cider,
            current_volume_gallons=current_volume_gallons,
            current_alcohol_pct=current_alcohol_pct,
            current_ph=current_ph,
            current_ta=current_ta,
            aging_start_date=aging_start_date,
            fermentation_end_date=fermentation_end_date,
            container_name=container_name,
            bond_status=bond_status,
            created_at=now,
            updated_at=now,
        )
