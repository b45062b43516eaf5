"""Subscription Repository Interface

Defines the contract for subscription persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.subscription import Subscription


class SubscriptionRepository(ABC):
    """
    Repository interface for Subscription persistence

    Each clinic has at most one subscription. A missing subscription is a
    normal result (None), not an error.
    """

    @abstractmethod
    async def get_by_clinic_id(self, clinic_id: str) -> Optional[Subscription]:
        """
        Retrieve subscription by clinic ID

        Args:
            clinic_id: Clinic identifier

        Returns:
            Subscription if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, subscription: Subscription) -> Subscription:
        """
        Persist a clinic's first subscription (trial start)

        The caller commits through the unit of work.
        """
        pass

    @abstractmethod
    async def update(self, subscription: Subscription) -> Subscription:
        """Write back plan or status changes; updated_at is refreshed"""
        pass
