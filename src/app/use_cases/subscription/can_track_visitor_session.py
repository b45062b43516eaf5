"""Can Track Visitor Session Use Case

Fast gate called on every public diagnosis page view.
"""

import logging
from datetime import datetime
from typing import Callable

from libs.result import Result, Return
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.services.subscription_resolver import SubscriptionResolver
from .fetch import fetch_subscription

logger = logging.getLogger(__name__)


class CanTrackVisitorSession:
    """
    Use case: Decide whether a visitor session may be recorded

    Only the subscription is read. The QR code count is never queried on
    this path.
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

    async def execute(self, clinic_id: str) -> Result[bool]:
        """
        Execute the tracking gate

        Args:
            clinic_id: Clinic owning the QR code being viewed

        Returns:
            Result[bool]: True when the session may be recorded

        Errors:
            SUBSCRIPTION_FETCH_FAILED: Subscription store failed
        """
        subscription_result = await fetch_subscription(self.subscription_repo, clinic_id)
        if subscription_result.is_err():
            return subscription_result

        allowed = self.resolver.can_track_visitor_session(subscription_result.value, self.clock())
        logger.debug(f"Tracking gate for clinic {clinic_id}: {allowed}")
        return Return.ok(allowed)
