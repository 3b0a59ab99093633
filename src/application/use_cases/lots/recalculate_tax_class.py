from __future__ import annotations

import logging
from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.production_lot import ProductionLot
from src.domain.services.tax_classification import TAX_CLASS_RULES_VERSION, determine_tax_class
from src.domain.value_objects.tax_class import TaxClass

logger = logging.getLogger(__name__)


def classify(lot: ProductionLot) -> TaxClass:
    return determine_tax_class(
        lot.wine_type, lot.current_alcohol_pct, is_hard_cider=lot.is_hard_cider
    )


def effective_tax_class(lot: ProductionLot) -> TaxClass:
    """Stored class when tagged under the current rules, otherwise a fresh classification."""
    if lot.ttb_tax_class is not None and lot.tax_class_rules_version == TAX_CLASS_RULES_VERSION:
        return lot.ttb_tax_class
    return classify(lot)


async def execute(uow: UnitOfWork, tenant_id: UUID, lot_id: UUID) -> ProductionLot:
    lot = await uow.lots.get(tenant_id, lot_id)
    if not lot:
        raise NotFound("Lot not found")
    tax_class = classify(lot)
    if lot.ttb_tax_class is tax_class and lot.tax_class_rules_version == TAX_CLASS_RULES_VERSION:
        return lot
    updated = await uow.lots.update(
        tenant_id,
        lot_id,
        {"ttb_tax_class": tax_class, "tax_class_rules_version": TAX_CLASS_RULES_VERSION},
    )
    if not updated:
        raise NotFound("Lot not found")
    await uow.commit()
    logger.info(
        "Lot %s tax class %s -> %s",
        lot_id,
        lot.ttb_tax_class.value if lot.ttb_tax_class else None,
        tax_class.value,
    )
    return updated
