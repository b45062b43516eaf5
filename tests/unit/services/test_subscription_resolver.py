"""Unit tests for SubscriptionResolver

Covers the end-to-end scenarios and the agreement between the full state
and the fast tracking gate over a generated state space.
"""

import itertools
import pytest
from datetime import timedelta

from src.app.services.subscription_resolver import (
    TRACKING_PERMISSIONS,
    SubscriptionResolver,
)
from src.domain.subscription_state import AlertSeverity, LifecycleStatus


@pytest.fixture
def resolver():
    return SubscriptionResolver()


class TestScenarios:
    def test_no_subscription_is_fully_restricted(self, resolver, now):
        state = resolver.resolve_state(None, 0, now)

        assert state.status == LifecycleStatus.EXPIRED
        assert state.is_active is False
        assert state.can_create_qr_code is False
        assert state.can_track_visitor_session is False
        assert state.can_create_custom_diagnosis is False
        assert state.remaining_qr_codes == 0
        assert state.alert_severity == AlertSeverity.ERROR

    def test_signup_today(self, resolver, make_subscription, now):
        subscription = make_subscription(status="trial", trial_end=now + timedelta(days=14))

        state = resolver.resolve_state(subscription, 0, now)

        assert state.status == LifecycleStatus.TRIAL
        assert state.trial_days_left == 14
        assert state.can_create_qr_code is True
        assert state.remaining_qr_codes == 2
        assert state.qr_code_limit == 2
        assert state.can_track_visitor_session is True
        assert state.alert_severity == AlertSeverity.INFO

    def test_trial_five_days_left_is_info(self, resolver, make_subscription, now):
        subscription = make_subscription(status="trial", trial_end=now + timedelta(days=5))

        state = resolver.resolve_state(subscription, 1, now)

        assert state.trial_days_left == 5
        assert state.alert_severity == AlertSeverity.INFO

    def test_trial_two_days_left_is_warning(self, resolver, make_subscription, now):
        subscription = make_subscription(status="trial", trial_end=now + timedelta(days=2))

        state = resolver.resolve_state(subscription, 1, now)

        assert state.alert_severity == AlertSeverity.WARNING

    def test_canceled_within_period(self, resolver, make_subscription, now):
        period_end = now + timedelta(days=10)
        subscription = make_subscription(
            status="canceled",
            plan_type="standard",
            current_period_end=period_end,
            canceled_at=now - timedelta(days=1),
        )

        state = resolver.resolve_state(subscription, 3, now)

        assert state.status == LifecycleStatus.CANCELED
        assert state.is_active is True
        assert state.alert_severity == AlertSeverity.WARNING
        assert f"{period_end.year}年{period_end.month}月{period_end.day}日" in state.message
        assert state.current_period_end == period_end

    def test_active_period_ended_yesterday(self, resolver, make_subscription, now):
        yesterday = now - timedelta(days=1)
        subscription = make_subscription(status="active", plan_type="standard", current_period_end=yesterday)

        in_grace = resolver.resolve_state(subscription, 1, now)
        after_grace = resolver.resolve_state(subscription, 1, yesterday + timedelta(days=3, seconds=1))

        assert in_grace.status == LifecycleStatus.GRACE_PERIOD
        assert in_grace.is_active is True
        assert in_grace.can_create_qr_code is False
        assert in_grace.can_track_visitor_session is False
        assert in_grace.grace_period_days_left == 2
        assert in_grace.alert_severity == AlertSeverity.ERROR
        assert after_grace.status == LifecycleStatus.EXPIRED
        assert after_grace.is_active is False

    def test_active_quota_exhausted(self, resolver, make_subscription, now):
        subscription = make_subscription(status="active", plan_type="starter", current_period_end=None)

        state = resolver.resolve_state(subscription, 2, now)

        assert state.can_create_qr_code is False
        assert state.remaining_qr_codes == 0
        assert state.qr_code_count == 2
        assert state.alert_severity == AlertSeverity.WARNING

    def test_active_quota_available(self, resolver, make_subscription, now):
        subscription = make_subscription(status="active", plan_type="starter", current_period_end=None)

        state = resolver.resolve_state(subscription, 1, now)

        assert state.can_create_qr_code is True
        assert state.remaining_qr_codes == 1
        assert state.message is None
        assert state.alert_severity == AlertSeverity.NONE

    @pytest.mark.parametrize("count", [0, 2, 999])
    def test_free_tier(self, resolver, make_subscription, now, count):
        subscription = make_subscription(status="canceled", plan_type="free", current_period_end=now - timedelta(days=90))

        state = resolver.resolve_state(subscription, count, now)

        assert state.is_active is True
        assert state.can_create_qr_code is True
        assert state.remaining_qr_codes is None
        assert state.can_track_visitor_session is True
        assert state.can_create_custom_diagnosis is True
        assert state.plan_type == "free"

    def test_past_due_keeps_service_but_blocks_creation(self, resolver, make_subscription, now):
        subscription = make_subscription(status="past_due", plan_type="custom")

        state = resolver.resolve_state(subscription, 0, now)

        assert state.is_active is True
        assert state.can_create_qr_code is False
        assert state.can_track_visitor_session is False
        assert state.can_create_custom_diagnosis is False
        assert state.alert_severity == AlertSeverity.ERROR

    def test_identical_inputs_give_identical_state(self, resolver, make_subscription, now):
        subscription = make_subscription(status="trial", trial_end=now + timedelta(hours=30))

        assert resolver.resolve_state(subscription, 1, now) == resolver.resolve_state(subscription, 1, now)


STATUSES = ["trial", "active", "past_due", "canceled", "corrupt"]
PLANS = ["starter", "standard", "custom", "managed", "free", "unknown"]
OFFSETS = [None, -timedelta(days=10), -timedelta(days=3), -timedelta(days=1), timedelta(0), timedelta(days=2)]
GRACE_OFFSETS = [None, -timedelta(hours=1), timedelta(hours=1)]


class TestCrossPathAgreement:
    """Fast tracking gate agrees with the full state for every combination"""

    def test_generated_state_space(self, resolver, make_subscription, now):
        checked = 0
        for status, plan, trial_off, period_off, grace_off in itertools.product(
            STATUSES, PLANS, OFFSETS, OFFSETS, GRACE_OFFSETS
        ):
            subscription = make_subscription(
                status=status,
                plan_type=plan,
                trial_end=None if trial_off is None else now + trial_off,
                current_period_end=None if period_off is None else now + period_off,
                grace_period_end=None if grace_off is None else now + grace_off,
            )
            full = resolver.resolve_state(subscription, 1, now)
            fast = resolver.can_track_visitor_session(subscription, now)

            assert fast == full.can_track_visitor_session, (status, plan, trial_off, period_off, grace_off)
            assert fast == TRACKING_PERMISSIONS[full.status]
            checked += 1

        assert resolver.can_track_visitor_session(None, now) == resolver.resolve_state(None, 0, now).can_track_visitor_session
        assert checked == len(STATUSES) * len(PLANS) * len(OFFSETS) ** 2 * len(GRACE_OFFSETS)

    def test_agreement_across_time(self, resolver, make_subscription, now):
        subscription = make_subscription(status="trial", trial_end=now)
        for hours in range(-48, 24 * 5, 6):
            at = now + timedelta(hours=hours)
            assert resolver.can_track_visitor_session(subscription, at) == (
                resolver.resolve_state(subscription, 0, at).can_track_visitor_session
            )


class TestTrackingTable:
    def test_only_trial_and_active_track(self):
        tracking = {status for status, allowed in TRACKING_PERMISSIONS.items() if allowed}

        assert tracking == {LifecycleStatus.TRIAL, LifecycleStatus.ACTIVE}
        assert set(TRACKING_PERMISSIONS) == set(LifecycleStatus)
