from __future__ import annotations

from collections import defaultdict
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError, InfrastructureError
from src.application.interfaces.repositories.lots import LotsRepository
from src.domain.models.production_lot import BarrelAssignment, ProductionLot
from src.domain.value_objects.lot_status import LotStatus
from src.domain.value_objects.tax_class import TaxClass
from src.infrastructure.db.orm.barrel_assignment import BarrelAssignmentORM
from src.infrastructure.db.orm.production_lot import ProductionLotORM


class LotsSQLAlchemyRepository(LotsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _assignment_to_domain(self, orm: BarrelAssignmentORM) -> BarrelAssignment:
        return BarrelAssignment(
            id=orm.id,
            lot_id=orm.lot_id,
            barrel_name=orm.barrel_name,
            assigned_at=orm.assigned_at,
        )

    def _to_domain(
        self, orm: ProductionLotORM, assignments: list[BarrelAssignment] | None = None
    ) -> ProductionLot:
        return ProductionLot(
            id=orm.id,
            tenant_id=orm.tenant_id,
            name=orm.name,
            status=orm.status,
            varietal=orm.varietal,
            vintage=orm.vintage,
            wine_type=orm.wine_type,
            is_hard_cider=orm.is_hard_cider,
            current_volume_gallons=orm.current_volume_gallons,
            current_alcohol_pct=orm.current_alcohol_pct,
            current_ph=orm.current_ph,
            current_ta=orm.current_ta,
            aging_start_date=orm.aging_start_date,
            fermentation_end_date=orm.fermentation_end_date,
            container_name=orm.container_name,
            barrel_assignments=assignments or [],
            ttb_tax_class=orm.ttb_tax_class,
            tax_class_rules_version=orm.tax_class_rules_version,
            bond_status=orm.bond_status,
            archived_at=orm.archived_at,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )

    async def _load_assignments(self, lot_ids: list[UUID]) -> dict[UUID, list[BarrelAssignment]]:
        if not lot_ids:
            return {}
        stmt = (
            select(BarrelAssignmentORM)
            .where(BarrelAssignmentORM.lot_id.in_(lot_ids))
            .order_by(BarrelAssignmentORM.assigned_at)
        )
        res = await self.session.execute(stmt)
        grouped: dict[UUID, list[BarrelAssignment]] = defaultdict(list)
        for row in res.scalars().all():
            grouped[row.lot_id].append(self._assignment_to_domain(row))
        return grouped

    async def add(self, lot: ProductionLot) -> ProductionLot:
        orm = ProductionLotORM(
            id=lot.id,
            tenant_id=lot.tenant_id,
            name=lot.name,
            status=lot.status,
            varietal=lot.varietal,
            vintage=lot.vintage,
            wine_type=lot.wine_type,
            is_hard_cider=lot.is_hard_cider,
            current_volume_gallons=lot.current_volume_gallons,
            current_alcohol_pct=lot.current_alcohol_pct,
            current_ph=lot.current_ph,
            current_ta=lot.current_ta,
            aging_start_date=lot.aging_start_date,
            fermentation_end_date=lot.fermentation_end_date,
            container_name=lot.container_name,
            ttb_tax_class=lot.ttb_tax_class,
            tax_class_rules_version=lot.tax_class_rules_version,
            bond_status=lot.bond_status,
            archived_at=lot.archived_at,
            created_at=lot.created_at,
            updated_at=lot.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Failed to create lot") from exc
        return self._to_domain(orm)

    async def get(self, tenant_id: UUID, lot_id: UUID) -> ProductionLot | None:
        stmt = select(ProductionLotORM).where(
            ProductionLotORM.tenant_id == tenant_id, ProductionLotORM.id == lot_id
        )
        try:
            res = await self.session.execute(stmt)
            orm = res.scalar_one_or_none()
            if not orm:
                return None
            assignments = await self._load_assignments([orm.id])
        except SQLAlchemyError as exc:
            raise InfrastructureError("Failed to load lot", details={"reason": str(exc)}) from exc
        return self._to_domain(orm, assignments.get(orm.id))

    async def list(
        self,
        tenant_id: UUID,
        *,
        include_archived: bool = False,
        statuses: list[LotStatus] | None = None,
        exclude_statuses: list[LotStatus] | None = None,
    ) -> list[ProductionLot]:
        stmt = select(ProductionLotORM).where(ProductionLotORM.tenant_id == tenant_id)
        if not include_archived:
            stmt = stmt.where(ProductionLotORM.archived_at.is_(None))
        if statuses:
            stmt = stmt.where(ProductionLotORM.status.in_(statuses))
        if exclude_statuses:
            stmt = stmt.where(ProductionLotORM.status.not_in(exclude_statuses))
        stmt = stmt.order_by(ProductionLotORM.created_at.desc(), ProductionLotORM.id)
        try:
            res = await self.session.execute(stmt)
            rows = res.scalars().all()
            # One extra query for every lot's barrels
            assignments = await self._load_assignments([r.id for r in rows])
        except SQLAlchemyError as exc:
            raise InfrastructureError("Failed to load lots", details={"reason": str(exc)}) from exc
        return [self._to_domain(r, assignments.get(r.id)) for r in rows]

    async def update(self, tenant_id: UUID, lot_id: UUID, data: dict) -> ProductionLot | None:
        stmt = (
            update(ProductionLotORM)
            .where(ProductionLotORM.tenant_id == tenant_id, ProductionLotORM.id == lot_id)
            .values(**data)
            .returning(ProductionLotORM)
        )
        try:
            res = await self.session.execute(stmt)
            orm = res.scalar_one_or_none()
            if not orm:
                return None
            assignments = await self._load_assignments([orm.id])
        except IntegrityError as exc:
            raise ConflictError("Lot update conflicts with existing data") from exc
        except SQLAlchemyError as exc:
            raise InfrastructureError("Failed to update lot", details={"reason": str(exc)}) from exc
        return self._to_domain(orm, assignments.get(orm.id))

    async def add_barrel_assignment(self, assignment: BarrelAssignment) -> BarrelAssignment:
        orm = BarrelAssignmentORM(
            id=assignment.id,
            lot_id=assignment.lot_id,
            barrel_name=assignment.barrel_name,
            assigned_at=assignment.assigned_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Failed to assign barrel") from exc
        return self._assignment_to_domain(orm)

    async def bulk_update_tax_classes(
        self, tenant_id: UUID, changes: dict[UUID, TaxClass], rules_version: str
    ) -> int:
        by_class: dict[TaxClass, list[UUID]] = defaultdict(list)
        for lot_id, tax_class in changes.items():
            by_class[tax_class].append(lot_id)
        updated = 0
        try:
            for tax_class, lot_ids in by_class.items():
                stmt = (
                    update(ProductionLotORM)
                    .where(
                        ProductionLotORM.tenant_id == tenant_id,
                        ProductionLotORM.id.in_(lot_ids),
                    )
                    .values(ttb_tax_class=tax_class, tax_class_rules_version=rules_version)
                    .execution_options(synchronize_session=False)
                )
                res = await self.session.execute(stmt)
                updated += res.rowcount or 0
        except SQLAlchemyError as exc:
            raise InfrastructureError("Failed to update lot tax classes") from exc
        return updated
