"""Get Subscription Summary Use Case

Billing page view: resolved state plus stored dates and plan display data.
"""

from datetime import datetime
from typing import Callable

from libs.result import Result, Return
from src.app.repositories.channel_repository import ChannelRepository
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.services.subscription_resolver import SubscriptionResolver
from src.domain.plan import get_plan, get_public_plans
from .dtos import PlanDTO, SubscriptionSummaryDTO
from .get_subscription_state import GetSubscriptionState


class GetSubscriptionSummary:
    """
    Use case: Subscription summary for the billing page

    The plan name and price shown are those of the stored plan tier, while
    the quota figures in state follow the effective tier (trial clinics see
    the trial-equivalent limits).
    """

    def __init__(
        self,
        subscription_repo: SubscriptionRepository,
        channel_repo: ChannelRepository,
        resolver: SubscriptionResolver,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.get_state = GetSubscriptionState(subscription_repo, channel_repo, resolver, clock)

    async def execute(self, clinic_id: str) -> Result[SubscriptionSummaryDTO]:
        loaded = await self.get_state.load(clinic_id)
        if loaded.is_err():
            return loaded
        subscription, state = loaded.value

        plan = get_plan(subscription.plan_type if subscription else None)

        return Return.ok(
            SubscriptionSummaryDTO(
                clinic_id=clinic_id,
                has_subscription=subscription is not None,
                plan_name=plan.name,
                plan_amount=plan.price,
                trial_end=subscription.trial_end if subscription else None,
                current_period_start=subscription.current_period_start if subscription else None,
                canceled_at=subscription.canceled_at if subscription else None,
                state=state,
                available_plans=[PlanDTO.from_plan(p) for p in get_public_plans()],
            )
        )
