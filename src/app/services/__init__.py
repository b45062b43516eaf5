from .unit_of_work import UnitOfWork
from .lifecycle_resolver import LifecyclePolicy, LifecycleResolver
from .quota_evaluator import QuotaEvaluator, QuotaOutcome
from .alert_messages import AlertMessage, AlertMessageBuilder
from .subscription_resolver import SubscriptionResolver

__all__ = [
    "UnitOfWork",
    "LifecyclePolicy",
    "LifecycleResolver",
    "QuotaEvaluator",
    "QuotaOutcome",
    "AlertMessage",
    "AlertMessageBuilder",
    "SubscriptionResolver",
]
