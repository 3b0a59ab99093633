from __future__ import annotations

import logging
from dataclasses import dataclass, field
from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.lots.recalculate_tax_class import classify
from src.domain.services.tax_classification import TAX_CLASS_RULES_VERSION
from src.domain.value_objects.tax_class import TaxClass

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class BatchTaxClassResult:
    examined: int
    updated: int
    rules_version: str
    changes: dict[UUID, TaxClass] = field(default_factory=dict)


async def execute(uow: UnitOfWork, tenant_id: UUID) -> BatchTaxClassResult:
    lots = await uow.lots.list(tenant_id)
    changes: dict[UUID, TaxClass] = {}
    for lot in lots:
        tax_class = classify(lot)
        if (
            lot.ttb_tax_class is not tax_class
            or lot.tax_class_rules_version != TAX_CLASS_RULES_VERSION
        ):
            changes[lot.id] = tax_class

    updated = 0
    if changes:
        updated = await uow.lots.bulk_update_tax_classes(
            tenant_id, changes, TAX_CLASS_RULES_VERSION
        )
        await uow.commit()
    logger.info(
        "Tax class batch for tenant %s: %d lots examined, %d retagged under %s",
        tenant_id,
        len(lots),
        updated,
        TAX_CLASS_RULES_VERSION,
    )
    return BatchTaxClassResult(
        examined=len(lots),
        updated=updated,
        rules_version=TAX_CLASS_RULES_VERSION,
        changes=changes,
    )
