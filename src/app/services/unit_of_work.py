"""Unit of Work Interface

Transaction boundary for write use cases.
"""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """Abstract transaction boundary"""

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
