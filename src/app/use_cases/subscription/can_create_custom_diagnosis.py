"""Can Create Custom Diagnosis Use Case"""

from datetime import datetime
from typing import Callable

from libs.result import Result, Return
from src.app.repositories.channel_repository import ChannelRepository
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.services.quota_evaluator import RESOURCE_BEARING_STATUSES
from src.app.services.subscription_resolver import SubscriptionResolver
from .dtos import CustomDiagnosisPermissionDTO
from .get_subscription_state import GetSubscriptionState

MSG_PLAN_REQUIRED = "オリジナル診断の作成はカスタムプラン以上でご利用いただけます。"


class CanCreateCustomDiagnosis:
    """
    Use case: Custom diagnosis authoring permission

    Lifecycle gates first; then the plan's capability flag. When the
    lifecycle blocks, the lifecycle banner is returned as the reason.
    """

    def __init__(
        self,
        subscription_repo: SubscriptionRepository,
        channel_repo: ChannelRepository,
        resolver: SubscriptionResolver,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.get_state = GetSubscriptionState(subscription_repo, channel_repo, resolver, clock)

    async def execute(self, clinic_id: str) -> Result[CustomDiagnosisPermissionDTO]:
        state_result = await self.get_state.execute(clinic_id)
        if state_result.is_err():
            return state_result
        state = state_result.value

        if state.can_create_custom_diagnosis:
            return Return.ok(CustomDiagnosisPermissionDTO(allowed=True))

        if state.status not in RESOURCE_BEARING_STATUSES:
            return Return.ok(CustomDiagnosisPermissionDTO(allowed=False, message=state.message))

        return Return.ok(CustomDiagnosisPermissionDTO(allowed=False, message=MSG_PLAN_REQUIRED))
