from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError, InfrastructureError
from src.application.interfaces.repositories.ttb_transactions import TTBTransactionsRepository
from src.domain.models.ttb_transaction import TTBTransaction
from src.domain.value_objects.tax_class import TaxClass
from src.domain.value_objects.transaction_type import TransactionType
from src.infrastructure.db.orm.ttb_transaction import TTBTransactionORM


class TTBTransactionsSQLAlchemyRepository(TTBTransactionsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: TTBTransactionORM) -> TTBTransaction:
        return TTBTransaction(
            id=orm.id,
            tenant_id=orm.tenant_id,
            transaction_type=orm.transaction_type,
            tax_class=orm.tax_class,
            volume_gallons=orm.volume_gallons,
            transaction_date=orm.transaction_date,
            lot_id=orm.lot_id,
            container_id=orm.container_id,
            bottling_run_id=orm.bottling_run_id,
            bond_status=orm.bond_status,
            source_event_type=orm.source_event_type,
            source_event_id=orm.source_event_id,
            notes=orm.notes,
            created_by=orm.created_by,
            created_at=orm.created_at,
        )

    async def add(self, tx: TTBTransaction) -> TTBTransaction:
        orm = TTBTransactionORM(
            id=tx.id,
            tenant_id=tx.tenant_id,
            transaction_type=tx.transaction_type,
            tax_class=tx.tax_class,
            volume_gallons=tx.volume_gallons,
            transaction_date=tx.transaction_date,
            lot_id=tx.lot_id,
            container_id=tx.container_id,
            bottling_run_id=tx.bottling_run_id,
            bond_status=tx.bond_status,
            source_event_type=tx.source_event_type,
            source_event_id=tx.source_event_id,
            notes=tx.notes,
            created_by=tx.created_by,
            created_at=tx.created_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("TTB transaction already logged for this event") from exc
        return self._to_domain(orm)

    async def get(self, tenant_id: UUID, transaction_id: UUID) -> TTBTransaction | None:
        stmt = select(TTBTransactionORM).where(
            TTBTransactionORM.tenant_id == tenant_id, TTBTransactionORM.id == transaction_id
        )
        try:
            res = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise InfrastructureError(
                "Failed to load TTB transaction", details={"reason": str(exc)}
            ) from exc
        orm = res.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_by_source_event(
        self, tenant_id: UUID, source_event_type: str, source_event_id: UUID
    ) -> TTBTransaction | None:
        stmt = select(TTBTransactionORM).where(
            TTBTransactionORM.tenant_id == tenant_id,
            TTBTransactionORM.source_event_type == source_event_type,
            TTBTransactionORM.source_event_id == source_event_id,
        )
        try:
            res = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise InfrastructureError(
                "Failed to load TTB transaction", details={"reason": str(exc)}
            ) from exc
        orm = res.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(
        self,
        tenant_id: UUID,
        *,
        date_from: date | None = None,
        date_to: date | None = None,
        before: date | None = None,
        transaction_type: TransactionType | None = None,
        tax_class: TaxClass | None = None,
        lot_id: UUID | None = None,
        limit: int | None = None,
    ) -> list[TTBTransaction]:
        conds = [TTBTransactionORM.tenant_id == tenant_id]
        if date_from:
            conds.append(TTBTransactionORM.transaction_date >= date_from)
        if date_to:
            conds.append(TTBTransactionORM.transaction_date <= date_to)
        if before:
            conds.append(TTBTransactionORM.transaction_date < before)
        if transaction_type is not None:
            conds.append(TTBTransactionORM.transaction_type == transaction_type)
        if tax_class is not None:
            conds.append(TTBTransactionORM.tax_class == tax_class)
        if lot_id is not None:
            conds.append(TTBTransactionORM.lot_id == lot_id)
        stmt = (
            select(TTBTransactionORM)
            .where(*conds)
            .order_by(TTBTransactionORM.transaction_date.desc(), TTBTransactionORM.created_at.desc())
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        try:
            res = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise InfrastructureError(
                "Failed to load TTB transactions", details={"reason": str(exc)}
            ) from exc
        return [self._to_domain(r) for r in res.scalars().all()]

    async def update(
        self, tenant_id: UUID, transaction_id: UUID, data: dict
    ) -> TTBTransaction | None:
        stmt = (
            update(TTBTransactionORM)
            .where(
                TTBTransactionORM.tenant_id == tenant_id, TTBTransactionORM.id == transaction_id
            )
            .values(**data)
            .returning(TTBTransactionORM)
        )
        try:
            res = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError("TTB transaction conflicts with an existing entry") from exc
        except SQLAlchemyError as exc:
            raise InfrastructureError(
                "Failed to update TTB transaction", details={"reason": str(exc)}
            ) from exc
        orm = res.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def delete(self, tenant_id: UUID, transaction_id: UUID) -> bool:
        stmt = (
            delete(TTBTransactionORM)
            .where(
                TTBTransactionORM.tenant_id == tenant_id, TTBTransactionORM.id == transaction_id
            )
            .returning(TTBTransactionORM.id)
        )
        try:
            res = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise InfrastructureError(
                "Failed to delete TTB transaction", details={"reason": str(exc)}
            ) from exc
        return res.scalar_one_or_none() is not None

    async def sum_by_type_and_class(
        self, tenant_id: UUID, *, date_from: date, date_to: date
    ) -> dict[tuple[TransactionType, TaxClass], Decimal]:
        stmt = (
            select(
                TTBTransactionORM.transaction_type,
                TTBTransactionORM.tax_class,
                func.sum(TTBTransactionORM.volume_gallons),
            )
            .where(
                TTBTransactionORM.tenant_id == tenant_id,
                TTBTransactionORM.transaction_date >= date_from,
                TTBTransactionORM.transaction_date <= date_to,
            )
            .group_by(TTBTransactionORM.transaction_type, TTBTransactionORM.tax_class)
        )
        try:
            res = await self.session.execute(stmt)
        except SQLAlchemyError as exc:
            raise InfrastructureError(
                "Failed to total TTB transactions", details={"reason": str(exc)}
            ) from exc
        return {
            (tx_type, tax_class): Decimal(str(total or 0))
            for tx_type, tax_class, total in res.all()
        }
