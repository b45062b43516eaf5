"""Unit tests for AlertMessageBuilder"""

import pytest
from datetime import datetime

from src.app.services.alert_messages import (
    MSG_CONTACT_SUPPORT,
    MSG_EXPIRED,
    MSG_PAST_DUE,
    NO_ALERT,
    AlertMessageBuilder,
    format_date_ja,
)
from src.domain.subscription_state import AlertSeverity, LifecycleOutcome, LifecycleStatus


def outcome(status, rule="test", **fields):
    return LifecycleOutcome(status=status, rule=rule, **fields)


@pytest.fixture
def builder():
    return AlertMessageBuilder()


class TestTrialMessages:
    def test_trial_more_than_three_days_is_info(self, builder):
        alert = builder.build(outcome(LifecycleStatus.TRIAL, trial_days_left=5))

        assert alert.severity == AlertSeverity.INFO
        assert "5日" in alert.message

    @pytest.mark.parametrize("days", [0, 1, 3])
    def test_trial_three_days_or_less_is_warning(self, builder, days):
        alert = builder.build(outcome(LifecycleStatus.TRIAL, trial_days_left=days))

        assert alert.severity == AlertSeverity.WARNING
        assert f"{days}日" in alert.message
        assert "有料プラン" in alert.message

    def test_trial_warning_threshold_configurable(self):
        builder = AlertMessageBuilder(trial_warning_days=7)

        alert = builder.build(outcome(LifecycleStatus.TRIAL, trial_days_left=5))

        assert alert.severity == AlertSeverity.WARNING

    def test_trial_message_beats_quota_message(self, builder):
        alert = builder.build(
            outcome(LifecycleStatus.TRIAL, trial_days_left=10),
            remaining_qr_codes=0,
            qr_code_limit=2,
        )

        assert alert.severity == AlertSeverity.INFO
        assert "上限" not in alert.message


class TestLockedStates:
    def test_grace_period(self, builder):
        alert = builder.build(outcome(LifecycleStatus.GRACE_PERIOD, grace_period_days_left=2))

        assert alert.severity == AlertSeverity.ERROR
        assert "2日" in alert.message

    def test_expired(self, builder):
        alert = builder.build(outcome(LifecycleStatus.EXPIRED, rule="trial_expired"))

        assert alert.severity == AlertSeverity.ERROR
        assert alert.message == MSG_EXPIRED

    def test_unrecognized_status_asks_to_contact_support(self, builder):
        alert = builder.build(outcome(LifecycleStatus.EXPIRED, rule="unrecognized_status"))

        assert alert.severity == AlertSeverity.ERROR
        assert alert.message == MSG_CONTACT_SUPPORT

    def test_past_due(self, builder):
        alert = builder.build(outcome(LifecycleStatus.PAST_DUE), remaining_qr_codes=0)

        assert alert.severity == AlertSeverity.ERROR
        assert alert.message == MSG_PAST_DUE


class TestCanceled:
    def test_canceled_message_contains_end_date(self, builder):
        alert = builder.build(
            outcome(LifecycleStatus.CANCELED, effective_period_end=datetime(2024, 6, 25, 9, 30))
        )

        assert alert.severity == AlertSeverity.WARNING
        assert "2024年6月25日" in alert.message

    def test_canceled_without_date(self, builder):
        alert = builder.build(outcome(LifecycleStatus.CANCELED))

        assert alert.severity == AlertSeverity.WARNING
        assert alert.message


class TestQuotaAndNone:
    def test_quota_exhausted_when_active(self, builder):
        alert = builder.build(outcome(LifecycleStatus.ACTIVE), remaining_qr_codes=0, qr_code_limit=10)

        assert alert.severity == AlertSeverity.WARNING
        assert "10枚" in alert.message

    def test_active_with_headroom_has_no_alert(self, builder):
        assert builder.build(outcome(LifecycleStatus.ACTIVE), remaining_qr_codes=3) == NO_ALERT

    def test_unlimited_has_no_alert(self, builder):
        alert = builder.build(outcome(LifecycleStatus.ACTIVE, is_admin_override=True), remaining_qr_codes=None)

        assert alert.message is None
        assert alert.severity == AlertSeverity.NONE


def test_format_date_ja():
    assert format_date_ja(datetime(2025, 1, 5)) == "2025年1月5日"
