from .subscription_repository import SubscriptionRepository
from .channel_repository import ChannelRepository

__all__ = [
    "SubscriptionRepository",
    "ChannelRepository",
]
