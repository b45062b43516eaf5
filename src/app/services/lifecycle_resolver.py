"""Lifecycle Resolver

Turns a stored Subscription and a point in time into a LifecycleOutcome.

The resolution is an ordered rule table evaluated first-match-wins. Every
boundary comparison is inclusive on the permissive side: at exactly
``now == boundary`` the clinic is still inside the window.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Optional, Sequence

from src.domain.plan import (
    GRACE_PERIOD_DAYS,
    TRIAL_DURATION_DAYS,
    TRIAL_PLAN_TIER,
    PlanType,
    parse_plan_type,
)
from src.domain.subscription import Subscription, SubscriptionStatus
from src.domain.subscription_state import LifecycleOutcome, LifecycleStatus

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


@dataclass(frozen=True)
class LifecyclePolicy:
    """Tunable lifecycle constants"""

    trial_duration_days: int = TRIAL_DURATION_DAYS
    grace_period_days: int = GRACE_PERIOD_DAYS
    trial_plan_tier: PlanType = TRIAL_PLAN_TIER

    @classmethod
    def from_config(cls, config) -> "LifecyclePolicy":
        """Build a policy from ApplicationConfig-like attributes"""
        trial_tier = parse_plan_type(config.TRIAL_PLAN_TIER)
        if trial_tier is None or trial_tier == PlanType.FREE:
            logger.warning(
                f"Invalid TRIAL_PLAN_TIER {config.TRIAL_PLAN_TIER!r}, "
                f"using {TRIAL_PLAN_TIER.value}"
            )
            trial_tier = TRIAL_PLAN_TIER
        return cls(
            trial_duration_days=config.TRIAL_DURATION_DAYS,
            grace_period_days=config.GRACE_PERIOD_DAYS,
            trial_plan_tier=trial_tier,
        )


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalise a timestamp to naive UTC (the storage convention)"""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def days_until(boundary: datetime, now: datetime) -> int:
    """Whole days from now until boundary, rounded up, never negative"""
    if now >= boundary:
        return 0
    days, remainder = divmod(boundary - now, ONE_DAY)
    return days + 1 if remainder else days


@dataclass(frozen=True)
class ResolutionContext:
    """Inputs shared by every rule"""

    subscription: Optional[Subscription]
    now: datetime
    policy: LifecyclePolicy

    @property
    def stored_status(self) -> Optional[str]:
        if self.subscription is None:
            return None
        status = self.subscription.status
        return status.value if isinstance(status, Enum) else status

    @property
    def trial_end(self) -> Optional[datetime]:
        return to_naive_utc(self.subscription.trial_end)

    @property
    def period_end(self) -> Optional[datetime]:
        return to_naive_utc(self.subscription.current_period_end)

    def grace_end(self, reference: Optional[datetime]) -> Optional[datetime]:
        """Stored grace end, else reference + grace period days"""
        stored = to_naive_utc(self.subscription.grace_period_end)
        if stored is not None:
            return stored
        if reference is None:
            return None
        return reference + timedelta(days=self.policy.grace_period_days)

    def within_grace(self, reference: Optional[datetime]) -> bool:
        end = self.grace_end(reference)
        return end is not None and self.now <= end

    def is_stored(self, status: SubscriptionStatus) -> bool:
        return self.stored_status == status.value

    def outcome(self, status: LifecycleStatus, rule: str, **fields) -> LifecycleOutcome:
        return LifecycleOutcome(
            status=status,
            rule=rule,
            stored_status=self.stored_status,
            **fields,
        )


@dataclass(frozen=True)
class LifecycleRule:
    """One row of the decision table"""

    name: str
    matches: Callable[[ResolutionContext], bool]
    build: Callable[[ResolutionContext], LifecycleOutcome]


def _no_subscription(ctx: ResolutionContext) -> LifecycleOutcome:
    return ctx.outcome(
        LifecycleStatus.EXPIRED,
        "no_subscription",
        trial_days_left=0,
        grace_period_days_left=0,
    )


def _admin_free_plan(ctx: ResolutionContext) -> LifecycleOutcome:
    return ctx.outcome(LifecycleStatus.ACTIVE, "admin_free_plan", is_admin_override=True)


def _trial_running(ctx: ResolutionContext) -> LifecycleOutcome:
    return ctx.outcome(
        LifecycleStatus.TRIAL,
        "trial_running",
        trial_days_left=days_until(ctx.trial_end, ctx.now),
        effective_period_end=ctx.trial_end,
    )


def _trial_grace(ctx: ResolutionContext) -> LifecycleOutcome:
    grace_end = ctx.grace_end(ctx.trial_end)
    return ctx.outcome(
        LifecycleStatus.GRACE_PERIOD,
        "trial_grace",
        trial_days_left=0,
        grace_period_days_left=days_until(grace_end, ctx.now),
        effective_period_end=grace_end,
    )


def _trial_expired(ctx: ResolutionContext) -> LifecycleOutcome:
    return ctx.outcome(LifecycleStatus.EXPIRED, "trial_expired", trial_days_left=0)


def _active_unbounded(ctx: ResolutionContext) -> LifecycleOutcome:
    return ctx.outcome(LifecycleStatus.ACTIVE, "active_unbounded")


def _active_in_period(ctx: ResolutionContext) -> LifecycleOutcome:
    return ctx.outcome(
        LifecycleStatus.ACTIVE,
        "active_in_period",
        effective_period_end=ctx.period_end,
    )


def _active_grace(ctx: ResolutionContext) -> LifecycleOutcome:
    grace_end = ctx.grace_end(ctx.period_end)
    return ctx.outcome(
        LifecycleStatus.GRACE_PERIOD,
        "active_grace",
        grace_period_days_left=days_until(grace_end, ctx.now),
        effective_period_end=grace_end,
    )


def _active_expired(ctx: ResolutionContext) -> LifecycleOutcome:
    return ctx.outcome(LifecycleStatus.EXPIRED, "active_expired")


def _canceled_in_period(ctx: ResolutionContext) -> LifecycleOutcome:
    return ctx.outcome(
        LifecycleStatus.CANCELED,
        "canceled_in_period",
        effective_period_end=ctx.period_end,
    )


def _canceled_expired(ctx: ResolutionContext) -> LifecycleOutcome:
    return ctx.outcome(LifecycleStatus.EXPIRED, "canceled_expired")


def _past_due(ctx: ResolutionContext) -> LifecycleOutcome:
    return ctx.outcome(
        LifecycleStatus.PAST_DUE,
        "past_due",
        effective_period_end=ctx.period_end,
    )


def _unrecognized_status(ctx: ResolutionContext) -> LifecycleOutcome:
    logger.warning(
        f"Unrecognized subscription status {ctx.stored_status!r} for clinic "
        f"{ctx.subscription.clinic_id}, failing closed"
    )
    return ctx.outcome(LifecycleStatus.EXPIRED, "unrecognized_status")


TRIAL = SubscriptionStatus.TRIAL
ACTIVE = SubscriptionStatus.ACTIVE
CANCELED = SubscriptionStatus.CANCELED
PAST_DUE = SubscriptionStatus.PAST_DUE

LIFECYCLE_RULES: tuple[LifecycleRule, ...] = (
    LifecycleRule(
        "no_subscription",
        lambda ctx: ctx.subscription is None,
        _no_subscription,
    ),
    LifecycleRule(
        "admin_free_plan",
        lambda ctx: parse_plan_type(ctx.subscription.plan_type) == PlanType.FREE,
        _admin_free_plan,
    ),
    LifecycleRule(
        "trial_running",
        lambda ctx: ctx.is_stored(TRIAL) and ctx.trial_end is not None and ctx.now <= ctx.trial_end,
        _trial_running,
    ),
    LifecycleRule(
        "trial_grace",
        lambda ctx: ctx.is_stored(TRIAL) and ctx.within_grace(ctx.trial_end),
        _trial_grace,
    ),
    LifecycleRule(
        "trial_expired",
        lambda ctx: ctx.is_stored(TRIAL),
        _trial_expired,
    ),
    LifecycleRule(
        "active_unbounded",
        lambda ctx: ctx.is_stored(ACTIVE) and ctx.period_end is None,
        _active_unbounded,
    ),
    LifecycleRule(
        "active_in_period",
        lambda ctx: ctx.is_stored(ACTIVE) and ctx.now <= ctx.period_end,
        _active_in_period,
    ),
    LifecycleRule(
        "active_grace",
        lambda ctx: ctx.is_stored(ACTIVE) and ctx.within_grace(ctx.period_end),
        _active_grace,
    ),
    LifecycleRule(
        "active_expired",
        lambda ctx: ctx.is_stored(ACTIVE),
        _active_expired,
    ),
    LifecycleRule(
        "canceled_in_period",
        lambda ctx: ctx.is_stored(CANCELED) and ctx.period_end is not None and ctx.now <= ctx.period_end,
        _canceled_in_period,
    ),
    LifecycleRule(
        "canceled_expired",
        lambda ctx: ctx.is_stored(CANCELED),
        _canceled_expired,
    ),
    LifecycleRule(
        "past_due",
        lambda ctx: ctx.is_stored(PAST_DUE),
        _past_due,
    ),
    LifecycleRule(
        "unrecognized_status",
        lambda ctx: True,
        _unrecognized_status,
    ),
)


class LifecycleResolver:
    """
    Resolves the lifecycle status of a subscription at a given time

    Pure: no I/O, no clock access. The same (subscription, now) always
    yields the same outcome. Resource counts play no part here.
    """

    def __init__(
        self,
        policy: Optional[LifecyclePolicy] = None,
        rules: Sequence[LifecycleRule] = LIFECYCLE_RULES,
    ):
        self.policy = policy or LifecyclePolicy()
        self.rules = rules

    def resolve(self, subscription: Optional[Subscription], now: datetime) -> LifecycleOutcome:
        """
        Resolve lifecycle status

        Args:
            subscription: Stored subscription, or None if the clinic has none
            now: Current time (naive UTC or timezone-aware)

        Returns:
            LifecycleOutcome from the first matching rule
        """
        ctx = ResolutionContext(
            subscription=subscription,
            now=to_naive_utc(now),
            policy=self.policy,
        )
        for rule in self.rules:
            if rule.matches(ctx):
                return rule.build(ctx)
        # A rule table without a catch-all row still fails closed
        return _unrecognized_status(ctx) if subscription else _no_subscription(ctx)
