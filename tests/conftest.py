import pytest
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

from src.domain.subscription import Subscription

NOW = datetime(2024, 6, 15, 12, 0, 0)


@pytest.fixture
def now():
    """Fixed point in time used as the clock in unit tests"""
    return NOW


@pytest.fixture
def clock(now):
    return lambda: now


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def make_subscription():
    """Factory for Subscription entities"""

    def _make(**overrides):
        data = {
            "id": 1,
            "clinic_id": "clinic_123",
            "status": "trial",
            "plan_type": "starter",
            "created_at": NOW,
            "updated_at": NOW,
        }
        data.update(overrides)
        return Subscription(**data)

    return _make
