"""Can Create QR Code Use Case

Checked by the channel creation endpoint before writing.
"""

from datetime import datetime
from typing import Callable

from libs.result import Result, Return
from src.app.repositories.channel_repository import ChannelRepository
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.services.alert_messages import MSG_QUOTA_EXHAUSTED
from src.app.services.quota_evaluator import RESOURCE_BEARING_STATUSES
from src.app.services.subscription_resolver import SubscriptionResolver
from .dtos import QRCodeQuotaDTO
from .get_subscription_state import GetSubscriptionState


class CanCreateQRCode:
    """
    Use case: QR code creation permission

    Projection of the full SubscriptionState. When creation is refused the
    message explains why: the quota message if the lifecycle would allow
    creation, the lifecycle banner otherwise.
    """

    def __init__(
        self,
        subscription_repo: SubscriptionRepository,
        channel_repo: ChannelRepository,
        resolver: SubscriptionResolver,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        self.get_state = GetSubscriptionState(subscription_repo, channel_repo, resolver, clock)

    async def execute(self, clinic_id: str) -> Result[QRCodeQuotaDTO]:
        state_result = await self.get_state.execute(clinic_id)
        if state_result.is_err():
            return state_result
        state = state_result.value

        if state.can_create_qr_code:
            message = None
        elif state.status in RESOURCE_BEARING_STATUSES:
            message = MSG_QUOTA_EXHAUSTED.format(limit=state.qr_code_limit)
        else:
            message = state.message

        return Return.ok(
            QRCodeQuotaDTO(
                can_create=state.can_create_qr_code,
                remaining=state.remaining_qr_codes,
                message=message,
            )
        )
