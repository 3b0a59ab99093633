from __future__ import annotations

from datetime import date
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.ttb_transaction import TTBTransaction
from src.domain.value_objects.tax_class import TaxClass
from src.domain.value_objects.transaction_type import TransactionType

DEFAULT_LIMIT = 100
MAX_LIMIT = 1000


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    *,
    date_from: date | None = None,
    date_to: date | None = None,
    transaction_type: TransactionType | None = None,
    tax_class: TaxClass | None = None,
    lot_id: UUID | None = None,
    limit: int | None = DEFAULT_LIMIT,
) -> list[TTBTransaction]:
    if limit is not None and (limit <= 0 or limit > MAX_LIMIT):
        raise ValidationError(f"limit must be between 1 and {MAX_LIMIT}")
    if date_from and date_to and date_to < date_from:
        raise ValidationError("date_to must not be before date_from")
    return await uow.ttb_transactions.list(
        tenant_id,
        date_from=date_from,
        date_to=date_to,
        transaction_type=transaction_type,
        tax_class=tax_class,
        lot_id=lot_id,
        limit=limit,
    )
