from .subscription_repository import SqlAlchemySubscriptionRepository
from .channel_repository import SqlAlchemyChannelRepository

__all__ = [
    "SqlAlchemySubscriptionRepository",
    "SqlAlchemyChannelRepository",
]
