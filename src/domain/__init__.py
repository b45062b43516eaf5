from .base import BaseModel, generate_uuid
from .channel import Channel
from .plan import Plan, PlanType, QuotaCheck, PLANS
from .subscription import Subscription, SubscriptionStatus
from .subscription_state import (
    AlertSeverity,
    LifecycleOutcome,
    LifecycleStatus,
    SubscriptionState,
)

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Channel",
    "Plan",
    "PlanType",
    "QuotaCheck",
    "PLANS",
    "Subscription",
    "SubscriptionStatus",
    "AlertSeverity",
    "LifecycleOutcome",
    "LifecycleStatus",
    "SubscriptionState",
]
