from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

import pytest

from src.application.errors import (
    ConflictError,
    InfrastructureError,
    ReportGenerationError,
    ValidationError,
)
from src.application.use_cases.lots import bottle_lot
from src.application.use_cases.ttb import (
    batch_update_lot_tax_classes,
    delete_report,
    generate_report,
    get_bulk_inventory,
    log_ttb_transaction,
    update_report_status,
)
from src.domain.models.production_lot import ProductionLot
from src.domain.models.ttb_report_period import TTBReportPeriod
from src.domain.services.tax_classification import TAX_CLASS_RULES_VERSION
from src.domain.value_objects.lot_status import LotStatus
from src.domain.value_objects.report_status import ReportStatus
from src.domain.value_objects.tax_class import TaxClass
from src.domain.value_objects.transaction_type import TransactionType


class StubLotsRepo:
    def __init__(self, *lots: ProductionLot) -> None:
        self.lots = {lot.id: lot for lot in lots}
        self.bulk_calls = 0

    async def get(self, tenant_id, lot_id):
        return self.lots.get(lot_id)

    async def list(self, tenant_id, **kwargs):
        return list(self.lots.values())

    async def update(self, tenant_id, lot_id, data):
        lot = self.lots.get(lot_id)
        if lot is None:
            return None
        lot = replace(lot, **data)
        self.lots[lot_id] = lot
        return lot

    async def bulk_update_tax_classes(self, tenant_id, changes, rules_version):
        self.bulk_calls += 1
        for lot_id, tax_class in changes.items():
            self.lots[lot_id] = replace(
                self.lots[lot_id], ttb_tax_class=tax_class, tax_class_rules_version=rules_version
            )
        return len(changes)


class StubTransactionsRepo:
    def __init__(self) -> None:
        self.items = []

    async def add(self, tx):
        self.items.append(tx)
        return tx

    async def get_by_source_event(self, tenant_id, source_event_type, source_event_id):
        for tx in self.items:
            if (tx.source_event_type, tx.source_event_id) == (source_event_type, source_event_id):
                return tx
        return None

    async def list(self, tenant_id, **kwargs):
        return list(self.items)


class FailingTransactionsRepo(StubTransactionsRepo):
    async def list(self, tenant_id, **kwargs):
        raise InfrastructureError("Database unavailable")


class StubReportsRepo:
    def __init__(self, *reports: TTBReportPeriod) -> None:
        self.reports = {r.id: r for r in reports}
        self.deleted = []

    async def get(self, tenant_id, report_id):
        return self.reports.get(report_id)

    async def update(self, tenant_id, report_id, data):
        report = replace(self.reports[report_id], **data)
        self.reports[report_id] = report
        return report

    async def delete(self, tenant_id, report_id):
        self.deleted.append(report_id)
        return self.reports.pop(report_id, None) is not None


def make_uow(lots=None, transactions=None, reports=None):
    commits = []

    async def commit():
        commits.append(True)

    async def rollback():
        return None

    return SimpleNamespace(
        lots=lots or StubLotsRepo(),
        ttb_transactions=transactions or StubTransactionsRepo(),
        ttb_reports=reports or StubReportsRepo(),
        commit=commit,
        rollback=rollback,
        commits=commits,
    )


def ready_lot(tenant_id, **overrides) -> ProductionLot:
    lot = ProductionLot.create(
        tenant_id=tenant_id,
        name="Reserve Syrah",
        status=LotStatus.READY_TO_BOTTLE,
        vintage=2022,
        current_volume_gallons=Decimal("100"),
        current_alcohol_pct=Decimal("14.2"),
        current_ph=Decimal("3.7"),
    )
    return replace(lot, **overrides)


def draft_report(tenant_id, status=ReportStatus.DRAFT) -> TTBReportPeriod:
    report = TTBReportPeriod.create(
        tenant_id=tenant_id, period_start=date(2024, 1, 1), period_end=date(2024, 1, 31)
    )
    return replace(report, status=status)


@pytest.mark.asyncio
async def test_logging_same_event_twice_does_not_double_count():
    uow = make_uow()
    tenant_id = uuid4()
    payload = log_ttb_transaction.LogTTBTransactionInput(
        source_event_type="lot_fermentation_complete",
        source_event_id=uuid4(),
        transaction_type=TransactionType.PRODUCED_FERMENTATION,
        tax_class=TaxClass.TABLE_WINE_16,
        volume_gallons=Decimal("250"),
    )
    first = await log_ttb_transaction.execute(uow, tenant_id, None, payload)
    second = await log_ttb_transaction.execute(uow, tenant_id, None, payload)
    assert first.created
    assert not second.created
    assert second.transaction.id == first.transaction.id
    assert len(uow.ttb_transactions.items) == 1
    assert len(uow.commits) == 1


@pytest.mark.asyncio
async def test_logging_rejects_non_positive_volume():
    uow = make_uow()
    with pytest.raises(ValidationError):
        await log_ttb_transaction.execute(
            uow,
            uuid4(),
            None,
            log_ttb_transaction.LogTTBTransactionInput(
                source_event_type="manual",
                source_event_id=uuid4(),
                transaction_type=TransactionType.BULK_TASTING,
                tax_class=TaxClass.TABLE_WINE_16,
                volume_gallons=Decimal("0"),
            ),
        )


@pytest.mark.asyncio
async def test_bottling_logs_both_sides_and_reduces_volume():
    tenant_id = uuid4()
    lot = ready_lot(tenant_id)
    uow = make_uow(lots=StubLotsRepo(lot))
    run_id = uuid4()
    payload = bottle_lot.BottleLotInput(volume_gallons=Decimal("40"), bottling_run_id=run_id)

    result = await bottle_lot.execute(uow, tenant_id, uuid4(), lot.id, payload)

    assert result.lot.current_volume_gallons == Decimal("60")
    assert result.lot.status is LotStatus.READY_TO_BOTTLE
    types = [tx.transaction_type for tx in uow.ttb_transactions.items]
    assert types == [TransactionType.BULK_BOTTLED, TransactionType.BOTTLED_PRODUCED]
    assert all(tx.bottling_run_id == run_id for tx in uow.ttb_transactions.items)

    repeat = await bottle_lot.execute(uow, tenant_id, uuid4(), lot.id, payload)
    assert repeat.already_recorded
    assert len(uow.ttb_transactions.items) == 2
    assert uow.lots.lots[lot.id].current_volume_gallons == Decimal("60")


@pytest.mark.asyncio
async def test_bottling_whole_lot_marks_it_bottled():
    tenant_id = uuid4()
    lot = ready_lot(tenant_id)
    uow = make_uow(lots=StubLotsRepo(lot))
    result = await bottle_lot.execute(
        uow, tenant_id, None, lot.id, bottle_lot.BottleLotInput(volume_gallons=Decimal("100"))
    )
    assert result.lot.status is LotStatus.BOTTLED
    assert result.lot.current_volume_gallons == Decimal("0")


@pytest.mark.asyncio
async def test_bottling_ineligible_lot_lists_blockers():
    tenant_id = uuid4()
    lot = ready_lot(tenant_id, status=LotStatus.AGING)
    uow = make_uow(lots=StubLotsRepo(lot))
    with pytest.raises(ValidationError) as exc_info:
        await bottle_lot.execute(
            uow, tenant_id, None, lot.id, bottle_lot.BottleLotInput(volume_gallons=Decimal("10"))
        )
    assert exc_info.value.details["blockers"]
    assert uow.ttb_transactions.items == []


@pytest.mark.asyncio
async def test_bottling_more_than_available_is_rejected():
    tenant_id = uuid4()
    lot = ready_lot(tenant_id)
    uow = make_uow(lots=StubLotsRepo(lot))
    with pytest.raises(ValidationError):
        await bottle_lot.execute(
            uow, tenant_id, None, lot.id, bottle_lot.BottleLotInput(volume_gallons=Decimal("101"))
        )


@pytest.mark.asyncio
async def test_bottling_reclassifies_lot_tagged_under_old_rules():
    tenant_id = uuid4()
    lot = ready_lot(
        tenant_id, ttb_tax_class=TaxClass.TABLE_WINE_21, tax_class_rules_version="5120.17-2019.1"
    )
    uow = make_uow(lots=StubLotsRepo(lot))
    await bottle_lot.execute(
        uow, tenant_id, None, lot.id, bottle_lot.BottleLotInput(volume_gallons=Decimal("20"))
    )
    assert {tx.tax_class for tx in uow.ttb_transactions.items} == {TaxClass.TABLE_WINE_16}


@pytest.mark.asyncio
async def test_bottling_keeps_class_tagged_under_current_rules():
    tenant_id = uuid4()
    lot = ready_lot(
        tenant_id,
        ttb_tax_class=TaxClass.TABLE_WINE_21,
        tax_class_rules_version=TAX_CLASS_RULES_VERSION,
    )
    uow = make_uow(lots=StubLotsRepo(lot))
    await bottle_lot.execute(
        uow, tenant_id, None, lot.id, bottle_lot.BottleLotInput(volume_gallons=Decimal("20"))
    )
    assert {tx.tax_class for tx in uow.ttb_transactions.items} == {TaxClass.TABLE_WINE_21}


@pytest.mark.asyncio
async def test_bulk_inventory_ignores_stale_tax_class_tags():
    tenant_id = uuid4()
    stale = ready_lot(
        tenant_id, ttb_tax_class=TaxClass.TABLE_WINE_21, tax_class_rules_version=None
    )
    uow = make_uow(lots=StubLotsRepo(stale))
    inventory = await get_bulk_inventory.execute(uow, tenant_id)
    assert inventory.by_tax_class[TaxClass.TABLE_WINE_16].in_bond == Decimal("100")
    assert inventory.by_tax_class[TaxClass.TABLE_WINE_21].lot_count == 0


@pytest.mark.asyncio
async def test_batch_tax_class_update_is_idempotent():
    tenant_id = uuid4()
    strong = ready_lot(tenant_id, current_alcohol_pct=Decimal("18"))
    light = ready_lot(
        tenant_id,
        id=uuid4(),
        ttb_tax_class=TaxClass.TABLE_WINE_16,
        tax_class_rules_version=TAX_CLASS_RULES_VERSION,
    )
    repo = StubLotsRepo(strong, light)
    uow = make_uow(lots=repo)

    first = await batch_update_lot_tax_classes.execute(uow, tenant_id)
    assert first.examined == 2
    assert first.updated == 1
    assert first.changes == {strong.id: TaxClass.TABLE_WINE_21}

    second = await batch_update_lot_tax_classes.execute(uow, tenant_id)
    assert second.updated == 0
    assert second.changes == {}
    assert repo.bulk_calls == 1


@pytest.mark.asyncio
async def test_generate_report_wraps_storage_failures():
    uow = make_uow(transactions=FailingTransactionsRepo())
    with pytest.raises(ReportGenerationError) as exc_info:
        await generate_report.execute(uow, uuid4(), date(2024, 1, 1), date(2024, 1, 31))
    assert exc_info.value.status_code == 503
    assert exc_info.value.details == {"reason": "Database unavailable"}


@pytest.mark.asyncio
async def test_generate_report_rejects_inverted_period():
    with pytest.raises(ValidationError):
        await generate_report.execute(make_uow(), uuid4(), date(2024, 2, 1), date(2024, 1, 1))


@pytest.mark.asyncio
async def test_submitting_report_stamps_submitter():
    tenant_id = uuid4()
    actor = uuid4()
    report = draft_report(tenant_id, ReportStatus.FINALIZED)
    uow = make_uow(reports=StubReportsRepo(report))
    updated = await update_report_status.execute(
        uow, tenant_id, actor, report.id, ReportStatus.SUBMITTED, confirmation_number="TTB-991"
    )
    assert updated.status is ReportStatus.SUBMITTED
    assert updated.submitted_by == actor
    assert updated.submitted_at is not None
    assert updated.confirmation_number == "TTB-991"


@pytest.mark.asyncio
async def test_submitted_report_is_final():
    tenant_id = uuid4()
    report = draft_report(tenant_id, ReportStatus.SUBMITTED)
    uow = make_uow(reports=StubReportsRepo(report))
    with pytest.raises(ConflictError):
        await update_report_status.execute(uow, tenant_id, uuid4(), report.id, ReportStatus.DRAFT)
    with pytest.raises(ConflictError):
        await delete_report.execute(uow, tenant_id, report.id)


@pytest.mark.asyncio
async def test_only_drafts_can_be_deleted():
    tenant_id = uuid4()
    draft = draft_report(tenant_id)
    finalized = draft_report(tenant_id, ReportStatus.FINALIZED)
    reports = StubReportsRepo(draft, finalized)
    uow = make_uow(reports=reports)
    await delete_report.execute(uow, tenant_id, draft.id)
    assert reports.deleted == [draft.id]
    with pytest.raises(ConflictError):
        await delete_report.execute(uow, tenant_id, finalized.id)
