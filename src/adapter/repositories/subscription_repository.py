"""SQLAlchemy Subscription Repository Implementation

Implements subscription persistence using SQLAlchemy async session.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.domain.subscription import Subscription


class SqlAlchemySubscriptionRepository(SubscriptionRepository):
    """
    SQLAlchemy implementation of SubscriptionRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_clinic_id(self, clinic_id: str) -> Optional[Subscription]:
        statement = select(Subscription).where(Subscription.clinic_id == clinic_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def create(self, subscription: Subscription) -> Subscription:
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription

    async def update(self, subscription: Subscription) -> Subscription:
        """
        Update an existing subscription

        Bumps updated_at before flushing.
        """
        subscription.updated_at = datetime.utcnow()
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription
