"""Subscription Resolver

Pure facade composing lifecycle resolution, quota evaluation and banner
messaging into a SubscriptionState. The visitor tracking gate is a
projection over the same lifecycle outcome, so the fast path and the
full state always agree.
"""

from datetime import datetime
from typing import Optional

from src.app.services.alert_messages import TRIAL_WARNING_DAYS, AlertMessageBuilder
from src.app.services.lifecycle_resolver import LifecyclePolicy, LifecycleResolver
from src.app.services.quota_evaluator import QuotaEvaluator
from src.domain.subscription import Subscription
from src.domain.subscription_state import LifecycleOutcome, LifecycleStatus, SubscriptionState

TRACKING_PERMISSIONS: dict[LifecycleStatus, bool] = {
    LifecycleStatus.TRIAL: True,
    LifecycleStatus.ACTIVE: True,  # includes the admin free tier
    LifecycleStatus.CANCELED: False,
    LifecycleStatus.PAST_DUE: False,
    LifecycleStatus.GRACE_PERIOD: False,
    LifecycleStatus.EXPIRED: False,
}

SERVICE_ACCESS_STATUSES = frozenset({
    LifecycleStatus.TRIAL,
    LifecycleStatus.ACTIVE,
    LifecycleStatus.CANCELED,
    LifecycleStatus.PAST_DUE,
    LifecycleStatus.GRACE_PERIOD,
})


def tracking_allowed(outcome: LifecycleOutcome) -> bool:
    return TRACKING_PERMISSIONS.get(outcome.status, False)


def service_active(outcome: LifecycleOutcome) -> bool:
    return outcome.status in SERVICE_ACCESS_STATUSES


class SubscriptionResolver:
    """
    Builds entitlement snapshots from already-fetched inputs

    Holds no mutable state; safe to share between requests.
    """

    def __init__(
        self,
        policy: Optional[LifecyclePolicy] = None,
        trial_warning_days: int = TRIAL_WARNING_DAYS,
    ):
        self.policy = policy or LifecyclePolicy()
        self.lifecycle = LifecycleResolver(self.policy)
        self.quota = QuotaEvaluator(self.policy.trial_plan_tier)
        self.alerts = AlertMessageBuilder(trial_warning_days)

    def resolve_lifecycle(self, subscription: Optional[Subscription], now: datetime) -> LifecycleOutcome:
        return self.lifecycle.resolve(subscription, now)

    def resolve_state(
        self,
        subscription: Optional[Subscription],
        qr_code_count: int,
        now: datetime,
    ) -> SubscriptionState:
        """
        Build the full SubscriptionState

        Args:
            subscription: Stored subscription, or None
            qr_code_count: QR codes the clinic currently has
            now: Current time

        Returns:
            SubscriptionState
        """
        outcome = self.resolve_lifecycle(subscription, now)
        plan_type = subscription.plan_type if subscription is not None else None
        quota = self.quota.evaluate(outcome, plan_type, qr_code_count)
        alert = self.alerts.build(
            outcome,
            remaining_qr_codes=quota.remaining_qr_codes,
            qr_code_limit=quota.qr_code_limit,
        )

        return SubscriptionState(
            status=outcome.status,
            plan_type=quota.plan_type.value,
            is_active=service_active(outcome),
            can_create_qr_code=quota.can_create_qr_code,
            can_track_visitor_session=tracking_allowed(outcome),
            can_create_custom_diagnosis=quota.can_create_custom_diagnosis,
            trial_days_left=outcome.trial_days_left,
            grace_period_days_left=outcome.grace_period_days_left,
            current_period_end=outcome.effective_period_end,
            qr_code_limit=quota.qr_code_limit,
            qr_code_count=qr_code_count,
            remaining_qr_codes=quota.remaining_qr_codes,
            message=alert.message,
            alert_severity=alert.severity,
        )

    def can_track_visitor_session(self, subscription: Optional[Subscription], now: datetime) -> bool:
        """Fast tracking gate: lifecycle only, no resource count"""
        return tracking_allowed(self.resolve_lifecycle(subscription, now))
