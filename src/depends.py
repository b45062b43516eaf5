from datetime import datetime
from functools import lru_cache
from typing import Callable

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.lifecycle_resolver import LifecyclePolicy
from src.app.services.subscription_resolver import SubscriptionResolver

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)


async def get_session() -> AsyncSession:
    async with AsyncSessionLocal() as session:
        yield session


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


@lru_cache
def get_lifecycle_policy() -> LifecyclePolicy:
    return LifecyclePolicy.from_config(ApplicationConfig)


@lru_cache
def get_subscription_resolver() -> SubscriptionResolver:
    # Stateless: sharing one instance does not cache any SubscriptionState
    return SubscriptionResolver(
        policy=get_lifecycle_policy(),
        trial_warning_days=ApplicationConfig.ALERT_TRIAL_WARNING_DAYS,
    )


def get_clock() -> Callable[[], datetime]:
    return datetime.utcnow
