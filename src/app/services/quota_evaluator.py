"""Quota Evaluator

Combines a LifecycleOutcome, the clinic's plan tier and its QR code count
into creation permissions. Loss of entitlement always overrides quota
headroom.
"""

from dataclasses import dataclass
from typing import Optional

from src.domain.plan import (
    TRIAL_PLAN_TIER,
    PlanType,
    can_create_custom_diagnosis,
    check_qr_code_quota,
    get_plan,
)
from src.domain.subscription import SubscriptionStatus
from src.domain.subscription_state import LifecycleOutcome, LifecycleStatus

# States in which the plan quota applies. Everything else is locked out.
RESOURCE_BEARING_STATUSES = frozenset({
    LifecycleStatus.TRIAL,
    LifecycleStatus.ACTIVE,
    LifecycleStatus.CANCELED,
})


@dataclass(frozen=True)
class QuotaOutcome:
    """Creation permissions for one clinic"""

    plan_type: PlanType
    qr_code_limit: Optional[int]
    can_create_qr_code: bool
    remaining_qr_codes: Optional[int]
    can_create_custom_diagnosis: bool


def allows_creation(outcome: LifecycleOutcome) -> bool:
    """Whether the lifecycle state lets the clinic create resources at all"""
    return outcome.is_admin_override or outcome.status in RESOURCE_BEARING_STATUSES


class QuotaEvaluator:
    """
    Evaluates QR code and custom diagnosis permissions

    The plan whose limits apply is the effective tier: the admin free tier
    when overridden, the trial-equivalent tier while the stored status is
    trial (including its grace and expired projections), otherwise the
    stored plan tier.
    """

    def __init__(self, trial_plan_tier: PlanType = TRIAL_PLAN_TIER):
        self.trial_plan_tier = trial_plan_tier

    def effective_plan_type(self, outcome: LifecycleOutcome, plan_type) -> PlanType:
        if outcome.is_admin_override:
            return PlanType.FREE
        if outcome.stored_status == SubscriptionStatus.TRIAL.value:
            return self.trial_plan_tier
        return get_plan(plan_type).type

    def evaluate(
        self,
        outcome: LifecycleOutcome,
        plan_type,
        qr_code_count: int,
    ) -> QuotaOutcome:
        """
        Evaluate creation permissions

        Args:
            outcome: Resolved lifecycle outcome
            plan_type: Stored plan tier (None when the clinic has no subscription)
            qr_code_count: QR codes the clinic currently has

        Returns:
            QuotaOutcome
        """
        effective = self.effective_plan_type(outcome, plan_type)
        plan = get_plan(effective)

        if not allows_creation(outcome):
            return QuotaOutcome(
                plan_type=effective,
                qr_code_limit=plan.qr_code_limit,
                can_create_qr_code=False,
                remaining_qr_codes=0,
                can_create_custom_diagnosis=False,
            )

        quota = check_qr_code_quota(effective, qr_code_count)
        return QuotaOutcome(
            plan_type=effective,
            qr_code_limit=plan.qr_code_limit,
            can_create_qr_code=quota.allowed,
            remaining_qr_codes=quota.remaining,
            can_create_custom_diagnosis=can_create_custom_diagnosis(effective),
        )
