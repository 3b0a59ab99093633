from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Protocol
from uuid import UUID

from src.domain.models.ttb_transaction import TTBTransaction
from src.domain.value_objects.tax_class import TaxClass
from src.domain.value_objects.transaction_type import TransactionType


class TTBTransactionsRepository(Protocol):
    async def add(self, tx: TTBTransaction) -> TTBTransaction: ...

    async def get(self, tenant_id: UUID, transaction_id: UUID) -> TTBTransaction | None: ...

    async def get_by_source_event(
        self, tenant_id: UUID, source_event_type: str, source_event_id: UUID
    ) -> TTBTransaction | None: ...

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
    ) -> list[TTBTransaction]: ...

    async def update(
        self, tenant_id: UUID, transaction_id: UUID, data: dict
    ) -> TTBTransaction | None: ...

    async def delete(self, tenant_id: UUID, transaction_id: UUID) -> bool: ...

    async def sum_by_type_and_class(
        self, tenant_id: UUID, *, date_from: date, date_to: date
    ) -> dict[tuple[TransactionType, TaxClass], Decimal]: ...
