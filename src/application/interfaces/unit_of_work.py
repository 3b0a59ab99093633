from __future__ import annotations

from typing import Protocol

from src.application.interfaces.repositories.lots import LotsRepository
from src.application.interfaces.repositories.ttb_reports import TTBReportsRepository
from src.application.interfaces.repositories.ttb_transactions import TTBTransactionsRepository
from src.application.interfaces.repositories.winery_registrations import (
    WineryRegistrationsRepository,
)


class UnitOfWork(Protocol):
    lots: LotsRepository
    ttb_transactions: TTBTransactionsRepository
    ttb_reports: TTBReportsRepository
    winery_registrations: WineryRegistrationsRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
