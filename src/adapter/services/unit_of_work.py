"""SQLAlchemy Unit of Work

Transaction boundary for the write use cases (StartTrial, ChangePlan).
Repositories flush into the same session; nothing is persisted until
commit is called.
"""

from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self) -> "SqlAlchemyUnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        # Uncommitted subscription writes are discarded on exit
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
