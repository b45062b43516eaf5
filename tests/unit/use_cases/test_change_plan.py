"""Unit tests for ChangePlan use case"""

import pytest
from datetime import timedelta
from unittest.mock import AsyncMock

from src.app.services.subscription_resolver import SubscriptionResolver
from src.app.use_cases.subscription.change_plan import ChangePlan
from src.app.use_cases.subscription.dtos import ChangePlanCommandDTO
from src.domain.subscription_state import LifecycleStatus


@pytest.fixture
def mock_subscription_repo():
    repo = AsyncMock()
    repo.update.side_effect = lambda subscription: subscription
    return repo


@pytest.fixture
def use_case(mock_uow, mock_subscription_repo):
    return ChangePlan(mock_uow, mock_subscription_repo)


@pytest.mark.asyncio
class TestChangePlan:
    async def test_upgrade_keeps_status(self, use_case, mock_uow, mock_subscription_repo, make_subscription):
        mock_subscription_repo.get_by_clinic_id.return_value = make_subscription(
            status="past_due", plan_type="starter"
        )

        result = await use_case.execute(ChangePlanCommandDTO(clinic_id="clinic_123", plan_type="custom"))

        assert result.is_ok()
        assert result.value.plan_type == "custom"
        assert result.value.status == "past_due"
        mock_uow.commit.assert_called_once()

    async def test_free_tier_activates(self, use_case, mock_subscription_repo, make_subscription):
        mock_subscription_repo.get_by_clinic_id.return_value = make_subscription(
            status="canceled", plan_type="standard"
        )

        result = await use_case.execute(ChangePlanCommandDTO(clinic_id="clinic_123", plan_type="free"))

        assert result.value.plan_type == "free"
        assert result.value.status == "active"

    async def test_free_tier_clears_billing_windows(self, use_case, mock_subscription_repo, make_subscription, now):
        """
        Given: Active standard clinic whose period ended 30 days ago
        When: Moved to free and then back to standard
        Then: No stale period end remains and the clinic resolves to active
        """
        # Arrange
        subscription = make_subscription(
            status="active",
            plan_type="standard",
            trial_end=now - timedelta(days=60),
            current_period_end=now - timedelta(days=30),
            grace_period_end=now - timedelta(days=27),
        )
        mock_subscription_repo.get_by_clinic_id.return_value = subscription

        # Act
        await use_case.execute(ChangePlanCommandDTO(clinic_id="clinic_123", plan_type="free"))
        result = await use_case.execute(ChangePlanCommandDTO(clinic_id="clinic_123", plan_type="standard"))

        # Assert
        assert result.is_ok()
        assert subscription.trial_end is None
        assert subscription.current_period_end is None
        assert subscription.grace_period_end is None
        assert result.value.current_period_end is None
        outcome = SubscriptionResolver().resolve_lifecycle(subscription, now)
        assert outcome.status == LifecycleStatus.ACTIVE
        assert outcome.rule == "active_unbounded"

    async def test_unknown_plan_rejected(self, use_case, mock_uow, mock_subscription_repo):
        result = await use_case.execute(ChangePlanCommandDTO(clinic_id="clinic_123", plan_type="platinum"))

        assert result.is_err()
        assert result.error.code == "INVALID_PLAN_TYPE"
        mock_subscription_repo.get_by_clinic_id.assert_not_called()
        mock_uow.commit.assert_not_called()

    async def test_missing_subscription(self, use_case, mock_subscription_repo):
        mock_subscription_repo.get_by_clinic_id.return_value = None

        result = await use_case.execute(ChangePlanCommandDTO(clinic_id="clinic_404", plan_type="standard"))

        assert result.is_err()
        assert result.error.code == "SUBSCRIPTION_NOT_FOUND"

    async def test_rollback_on_failure(self, use_case, mock_uow, mock_subscription_repo, make_subscription):
        mock_subscription_repo.get_by_clinic_id.return_value = make_subscription(status="active")
        mock_subscription_repo.update.side_effect = Exception("Database error")

        result = await use_case.execute(ChangePlanCommandDTO(clinic_id="clinic_123", plan_type="standard"))

        assert result.is_err()
        assert result.error.code == "CHANGE_PLAN_FAILED"
        mock_uow.rollback.assert_called_once()
