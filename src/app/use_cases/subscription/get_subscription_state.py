"""Get Subscription State Use Case

Builds the full entitlement snapshot for a clinic.
"""

from datetime import datetime
from typing import Callable, Optional, Tuple

from libs.result import Result, Return
from src.app.repositories.channel_repository import ChannelRepository
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.services.subscription_resolver import SubscriptionResolver
from src.domain.subscription import Subscription
from src.domain.subscription_state import SubscriptionState
from .fetch import fetch_channel_count, fetch_subscription


class GetSubscriptionState:
    """
    Use case: Resolve a clinic's SubscriptionState

    Flow:
    1. Fetch the subscription (absence is valid and resolves to expired)
    2. Count the clinic's QR codes (skipped when there is no subscription)
    3. Resolve lifecycle, quota and banner at the current time

    The state is recomputed on every call and never cached: grace_period
    and expired depend on the clock.
    """

    def __init__(
        self,
        subscription_repo: SubscriptionRepository,
        channel_repo: ChannelRepository,
        resolver: SubscriptionResolver,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.subscription_repo = subscription_repo
        self.channel_repo = channel_repo
        self.resolver = resolver
        self.clock = clock

    async def execute(self, clinic_id: str) -> Result[SubscriptionState]:
        """
        Execute state resolution

        Args:
            clinic_id: Clinic identifier

        Returns:
            Result[SubscriptionState]: Snapshot or fetch error

        Errors:
            SUBSCRIPTION_FETCH_FAILED: Subscription store failed
            CHANNEL_COUNT_FAILED: Channel store failed
        """
        loaded = await self.load(clinic_id)
        if loaded.is_err():
            return loaded
        _, state = loaded.value
        return Return.ok(state)

    async def load(self, clinic_id: str) -> Result[Tuple[Optional[Subscription], SubscriptionState]]:
        """Resolve the state and keep the fetched record for callers that display it"""
        subscription_result = await fetch_subscription(self.subscription_repo, clinic_id)
        if subscription_result.is_err():
            return subscription_result
        subscription = subscription_result.value

        qr_code_count = 0
        if subscription is not None:
            count_result = await fetch_channel_count(self.channel_repo, clinic_id)
            if count_result.is_err():
                return count_result
            qr_code_count = count_result.value

        state = self.resolver.resolve_state(subscription, qr_code_count, self.clock())
        return Return.ok((subscription, state))
