"""Store access shared by the subscription use cases

Storage failures are returned as errors, never replaced by a default
subscription state.
"""

import logging
from typing import Optional

from libs.result import Result, Return, Error
from src.app.repositories.channel_repository import ChannelRepository
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.domain.subscription import Subscription

logger = logging.getLogger(__name__)

SUBSCRIPTION_FETCH_FAILED = "SUBSCRIPTION_FETCH_FAILED"
CHANNEL_COUNT_FAILED = "CHANNEL_COUNT_FAILED"


async def fetch_subscription(
    subscription_repo: SubscriptionRepository, clinic_id: str
) -> Result[Optional[Subscription]]:
    """Fetch the clinic's subscription; Ok(None) when it has none"""
    try:
        subscription = await subscription_repo.get_by_clinic_id(clinic_id)
    except Exception as e:
        logger.error(f"Failed to fetch subscription for clinic {clinic_id}: {e}")
        return Return.err(
            Error(
                code=SUBSCRIPTION_FETCH_FAILED,
                message=f"Failed to fetch subscription for clinic {clinic_id}",
                reason=str(e),
            )
        )
    return Return.ok(subscription)


async def fetch_channel_count(
    channel_repo: ChannelRepository, clinic_id: str
) -> Result[int]:
    try:
        count = await channel_repo.count_by_clinic_id(clinic_id)
    except Exception as e:
        logger.error(f"Failed to count channels for clinic {clinic_id}: {e}")
        return Return.err(
            Error(
                code=CHANNEL_COUNT_FAILED,
                message=f"Failed to count QR codes for clinic {clinic_id}",
                reason=str(e),
            )
        )
    return Return.ok(count)
