"""Channel Repository Interface

Read-only access to QR code channels for quota checks.
"""

from abc import ABC, abstractmethod


class ChannelRepository(ABC):
    """Repository interface for counting a clinic's QR code channels"""

    @abstractmethod
    async def count_by_clinic_id(self, clinic_id: str) -> int:
        """
        Count QR code channels owned by a clinic

        Hidden (soft-disabled) channels are included.

        Args:
            clinic_id: Clinic identifier

        Returns:
            Number of channels
        """
        pass
