from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.application.interfaces.unit_of_work import UnitOfWork


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self.lots = None
        self.ttb_transactions = None
        self.ttb_reports = None
        self.winery_registrations = None

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from src.infrastructure.repos.lots_sqlalchemy import LotsSQLAlchemyRepository
        from src.infrastructure.repos.ttb_reports_sqlalchemy import TTBReportsSQLAlchemyRepository
        from src.infrastructure.repos.ttb_transactions_sqlalchemy import (
            TTBTransactionsSQLAlchemyRepository,
        )
        from src.infrastructure.repos.winery_registrations_sqlalchemy import (
            WineryRegistrationsSQLAlchemyRepository,
        )

        self.lots = LotsSQLAlchemyRepository(self.session)
        self.ttb_transactions = TTBTransactionsSQLAlchemyRepository(self.session)
        self.ttb_reports = TTBReportsSQLAlchemyRepository(self.session)
        self.winery_registrations = WineryRegistrationsSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self.lots = None
            self.ttb_transactions = None
            self.ttb_reports = None
            self.winery_registrations = None

    async def commit(self) -> None:
        if not self.session:
            return
        await self.session.commit()

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()
