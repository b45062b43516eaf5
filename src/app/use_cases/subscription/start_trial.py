"""Start Trial Use Case

Creates the clinic's subscription at signup.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from libs.result import Result, Return, Error
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.services.lifecycle_resolver import LifecyclePolicy
from src.app.services.unit_of_work import UnitOfWork
from src.domain.subscription import Subscription, SubscriptionStatus
from .dtos import SubscriptionResponseDTO

logger = logging.getLogger(__name__)


class StartTrial:
    """
    Use Case: Start a clinic's trial

    Business Rules:
    1. One subscription per clinic; a second trial is rejected
    2. status=trial, plan_type=trial-equivalent tier
    3. trial_end = now + trial duration days

    Flow:
    1. Check for an existing subscription
    2. Create the trial subscription
    3. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        subscription_repo: SubscriptionRepository,
        policy: Optional[LifecyclePolicy] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.uow = uow
        self.subscription_repo = subscription_repo
        self.policy = policy or LifecyclePolicy()
        self.clock = clock

    async def execute(self, clinic_id: str) -> Result[SubscriptionResponseDTO]:
        """
        Execute trial creation

        Args:
            clinic_id: Newly signed-up clinic

        Returns:
            Result[SubscriptionResponseDTO]: Created subscription or error

        Errors:
            SUBSCRIPTION_ALREADY_EXISTS: Clinic already has a subscription
            START_TRIAL_FAILED: Persistence failed
        """
        try:
            existing = await self.subscription_repo.get_by_clinic_id(clinic_id)
            if existing:
                return Return.err(
                    Error(
                        code="SUBSCRIPTION_ALREADY_EXISTS",
                        message=f"Clinic {clinic_id} already has a subscription",
                    )
                )

            now = self.clock()
            subscription = Subscription(
                clinic_id=clinic_id,
                status=SubscriptionStatus.TRIAL.value,
                plan_type=self.policy.trial_plan_tier.value,
                trial_end=now + timedelta(days=self.policy.trial_duration_days),
                created_at=now,
                updated_at=now,
            )
            created = await self.subscription_repo.create(subscription)
            await self.uow.commit()

            logger.info(
                f"Started {self.policy.trial_duration_days}-day trial for clinic {clinic_id}, "
                f"ends {created.trial_end.isoformat()}"
            )
            return Return.ok(SubscriptionResponseDTO.from_entity(created))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="START_TRIAL_FAILED",
                    message="Failed to start trial",
                    reason=str(e),
                )
            )
