"""Plan Catalog

Static definition of the plan tiers a clinic can subscribe to, with their
QR code quota and capability flags. Unknown tier identifiers always resolve
to the starter plan, never to an unlimited one.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class PlanType(str, Enum):
    """Plan tier identifiers"""
    STARTER = "starter"
    STANDARD = "standard"
    CUSTOM = "custom"
    MANAGED = "managed"
    FREE = "free"  # Admin-only override: unlimited, bypasses lifecycle checks


# Lifecycle constants. Runtime overrides come from ApplicationConfig.
TRIAL_DURATION_DAYS = 14
GRACE_PERIOD_DAYS = 3
TRIAL_PLAN_TIER = PlanType.STARTER  # Trial clinics get starter limits
DATA_RETENTION_DAYS = 90  # Data kept after the contract ends

DEFAULT_PLAN_TIER = PlanType.STARTER


@dataclass(frozen=True)
class Plan:
    """
    Plan - A named bundle of price, QR code quota and capabilities

    qr_code_limit of None means unlimited.
    """

    type: PlanType
    name: str
    price: int  # Monthly price in JPY, tax excluded
    qr_code_limit: Optional[int]
    description: str
    allows_custom_diagnosis: bool = False
    is_admin_only: bool = False
    features: tuple = field(default_factory=tuple)

    @property
    def is_unlimited(self) -> bool:
        return self.qr_code_limit is None


@dataclass(frozen=True)
class QuotaCheck:
    """Outcome of a quota check against a plan"""
    allowed: bool
    remaining: Optional[int]  # None = unlimited


PLANS: dict[PlanType, Plan] = {
    PlanType.STARTER: Plan(
        type=PlanType.STARTER,
        name="スタータープラン",
        price=4980,
        qr_code_limit=2,
        description="お手軽に始めたい医院様向け",
        features=(
            "QRコード2枚まで作成可能",
            "すべての診断コンテンツを利用可能",
            "診断結果の閲覧",
            "詳細な分析機能",
            "CSVエクスポート",
        ),
    ),
    PlanType.STANDARD: Plan(
        type=PlanType.STANDARD,
        name="スタンダードプラン",
        price=8800,
        qr_code_limit=10,
        description="本格的に活用したい医院様向け",
        features=(
            "QRコード10枚まで作成可能",
            "すべての診断コンテンツを利用可能",
            "診断結果の閲覧",
            "詳細な分析機能",
            "CSVエクスポート",
        ),
    ),
    PlanType.CUSTOM: Plan(
        type=PlanType.CUSTOM,
        name="カスタムプラン",
        price=12800,
        qr_code_limit=None,
        description="オリジナル診断を作成したい医院様向け",
        allows_custom_diagnosis=True,
        features=(
            "QRコード無制限",
            "すべての診断コンテンツを利用可能",
            "診断結果の閲覧",
            "詳細な分析機能",
            "CSVエクスポート",
            "オリジナル診断作成（無制限）",
        ),
    ),
    PlanType.MANAGED: Plan(
        type=PlanType.MANAGED,
        name="マネージドプラン",
        price=39800,
        qr_code_limit=None,
        description="マーケティング業務を丸ごとお任せ",
        allows_custom_diagnosis=True,
        features=(
            "カスタムプランの内容全て",
            "マーケティング業務を全て代行",
            "チラシ作成・ポスティング地域の提案",
            "オリジナル診断作成・業者やりとり・戦略立案",
            "貴院のマーケティング担当として伴走",
        ),
    ),
    PlanType.FREE: Plan(
        type=PlanType.FREE,
        name="特別プラン（無料・無制限）",
        price=0,
        qr_code_limit=None,
        description="管理者専用設定",
        allows_custom_diagnosis=True,
        is_admin_only=True,
        features=(
            "QRコード無制限",
            "全機能利用可能",
            "オリジナル診断作成（無制限）",
        ),
    ),
}


def parse_plan_type(value) -> Optional[PlanType]:
    """Return the PlanType for a stored identifier, or None if unrecognised"""
    if isinstance(value, PlanType):
        return value
    try:
        return PlanType(value)
    except ValueError:
        return None


def get_plan(plan_type) -> Plan:
    """
    Look up a plan by tier identifier

    Falls back to the starter plan for unknown or corrupt identifiers.
    """
    parsed = parse_plan_type(plan_type)
    if parsed is None:
        return PLANS[DEFAULT_PLAN_TIER]
    return PLANS[parsed]


def check_qr_code_quota(plan_type, current_count: int) -> QuotaCheck:
    """
    Check whether another QR code fits in the plan's quota

    Args:
        plan_type: Plan tier identifier
        current_count: QR codes the clinic already has

    Returns:
        QuotaCheck with allowed flag and remaining count (None when unlimited)
    """
    plan = get_plan(plan_type)
    if plan.qr_code_limit is None:
        return QuotaCheck(allowed=True, remaining=None)
    return QuotaCheck(
        allowed=current_count < plan.qr_code_limit,
        remaining=max(0, plan.qr_code_limit - current_count),
    )


def can_create_custom_diagnosis(plan_type) -> bool:
    return get_plan(plan_type).allows_custom_diagnosis


def get_public_plans() -> list[Plan]:
    """Plans offered on the pricing page (admin-only tiers excluded)"""
    return [plan for plan in PLANS.values() if not plan.is_admin_only]


def get_all_plans() -> list[Plan]:
    return list(PLANS.values())


def format_plan_price(price: int) -> str:
    if price == 0:
        return "無料"
    return f"¥{price:,}/月（税別）"
