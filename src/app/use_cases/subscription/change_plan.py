"""Change Plan Use Case

Administrative plan change for a clinic.
"""

import logging

from libs.result import Result, Return, Error
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.services.unit_of_work import UnitOfWork
from src.domain.plan import PlanType, get_plan, parse_plan_type
from src.domain.subscription import SubscriptionStatus
from .dtos import ChangePlanCommandDTO, SubscriptionResponseDTO

logger = logging.getLogger(__name__)


class ChangePlan:
    """
    Use Case: Change a clinic's plan tier

    Business Rules:
    1. Only catalog tiers are accepted
    2. Assigning the free tier also sets the stored status to active and
       clears trial_end, current_period_end and grace_period_end
    3. Other tiers keep the stored status (billing webhooks own it)
    """

    def __init__(self, uow: UnitOfWork, subscription_repo: SubscriptionRepository):
        self.uow = uow
        self.subscription_repo = subscription_repo

    async def execute(self, command: ChangePlanCommandDTO) -> Result[SubscriptionResponseDTO]:
        """
        Execute plan change

        Errors:
            INVALID_PLAN_TYPE: Unknown plan tier
            SUBSCRIPTION_NOT_FOUND: Clinic has no subscription
            CHANGE_PLAN_FAILED: Persistence failed
        """
        plan_type = parse_plan_type(command.plan_type)
        if plan_type is None:
            return Return.err(
                Error(
                    code="INVALID_PLAN_TYPE",
                    message=f"Unknown plan type: {command.plan_type}",
                )
            )

        try:
            subscription = await self.subscription_repo.get_by_clinic_id(command.clinic_id)
            if not subscription:
                return Return.err(
                    Error(
                        code="SUBSCRIPTION_NOT_FOUND",
                        message=f"No subscription found for clinic {command.clinic_id}",
                    )
                )

            previous = subscription.plan_type
            subscription.plan_type = plan_type.value
            if plan_type == PlanType.FREE:
                # Free has no billing windows
                subscription.status = SubscriptionStatus.ACTIVE.value
                subscription.trial_end = None
                subscription.current_period_end = None
                subscription.grace_period_end = None

            updated = await self.subscription_repo.update(subscription)
            await self.uow.commit()

            logger.info(
                f"Changed plan for clinic {command.clinic_id}: {previous} -> "
                f"{plan_type.value} ({get_plan(plan_type).name})"
            )
            return Return.ok(SubscriptionResponseDTO.from_entity(updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="CHANGE_PLAN_FAILED",
                    message="Failed to change plan",
                    reason=str(e),
                )
            )
