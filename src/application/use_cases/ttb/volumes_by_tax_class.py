from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork


def volume_key(transaction_type: str, tax_class: str) -> str:
    return f"{transaction_type}|{tax_class}"


async def execute(
    uow: UnitOfWork, tenant_id: UUID, date_from: date, date_to: date
) -> dict[str, Decimal]:
    """Gallons per ``"<transaction_type>|<tax_class>"`` key for the date range."""
    if date_to < date_from:
        raise ValidationError("date_to must not be before date_from")
    totals = await uow.ttb_transactions.sum_by_type_and_class(
        tenant_id, date_from=date_from, date_to=date_to
    )
    return {
        volume_key(tx_type.value, tax_class.value): volume
        for (tx_type, tax_class), volume in totals.items()
    }
