"""Check Subscription (simple) Use Case

Reduced subscription view kept for legacy callers.
"""

from datetime import datetime
from typing import Callable

from libs.result import Result, Return
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.services.subscription_resolver import SubscriptionResolver, service_active
from src.domain.subscription_state import LifecycleStatus
from .dtos import SimpleSubscriptionCheckDTO
from .fetch import fetch_subscription

SUSPENDED_LABEL = "suspended"

# Computed statuses have no legacy equivalent
LEGACY_STATUS_LABELS = {
    LifecycleStatus.GRACE_PERIOD: SUSPENDED_LABEL,
    LifecycleStatus.EXPIRED: SUSPENDED_LABEL,
}


class CheckSubscriptionSimple:
    """
    Use case: Legacy subscription check

    Uses the lifecycle resolver only; no QR code count is taken, so the
    banner never carries a quota message here.
    """

    def __init__(
        self,
        subscription_repo: SubscriptionRepository,
        resolver: SubscriptionResolver,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.subscription_repo = subscription_repo
        self.resolver = resolver
        self.clock = clock

    async def execute(self, clinic_id: str) -> Result[SimpleSubscriptionCheckDTO]:
        subscription_result = await fetch_subscription(self.subscription_repo, clinic_id)
        if subscription_result.is_err():
            return subscription_result

        outcome = self.resolver.resolve_lifecycle(subscription_result.value, self.clock())
        alert = self.resolver.alerts.build(outcome)

        return Return.ok(
            SimpleSubscriptionCheckDTO(
                is_active=service_active(outcome),
                status=LEGACY_STATUS_LABELS.get(outcome.status, outcome.status.value),
                trial_days_left=outcome.trial_days_left,
                message=alert.message,
            )
        )
