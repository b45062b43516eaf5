"""Data Transfer Objects for Subscription Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

from src.domain.plan import Plan, format_plan_price
from src.domain.subscription import Subscription
from src.domain.subscription_state import SubscriptionState


def _stored_value(value) -> str:
    return value.value if isinstance(value, Enum) else value


class SimpleSubscriptionCheckDTO(BaseModel):
    """
    Reduced subscription view for legacy callers

    status uses the legacy alphabet: trial, active, past_due, canceled,
    suspended. grace_period and expired are both reported as suspended.
    """

    is_active: bool = Field(
        ...,
        description="Whether the service is usable"
    )

    status: str = Field(
        ...,
        description="Legacy status label"
    )

    trial_days_left: Optional[int] = Field(
        default=None,
        description="Days left in the trial"
    )

    message: Optional[str] = Field(
        default=None,
        description="Banner message"
    )


class QRCodeQuotaDTO(BaseModel):
    """Response DTO for the QR code creation check"""

    can_create: bool = Field(
        ...,
        description="Whether a new QR code may be created"
    )

    remaining: Optional[int] = Field(
        default=None,
        description="QR codes that can still be created (None = unlimited)"
    )

    message: Optional[str] = Field(
        default=None,
        description="Reason shown when creation is refused"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "can_create": False,
                "remaining": 0,
                "message": "QRコードの作成上限（2枚）に達しました。追加で作成するにはプランをアップグレードしてください。"
            }
        }


class CustomDiagnosisPermissionDTO(BaseModel):
    """Response DTO for the custom diagnosis authoring check"""

    allowed: bool = Field(
        ...,
        description="Whether custom diagnoses may be authored"
    )

    message: Optional[str] = Field(
        default=None,
        description="Reason shown when authoring is refused"
    )


class TrackingGateResponseDTO(BaseModel):
    """Response DTO for the visitor tracking gate"""

    clinic_id: str
    can_track: bool


class PlanDTO(BaseModel):
    """Plan as shown on the pricing page"""

    type: str
    name: str
    price: int
    price_label: str
    qr_code_limit: Optional[int] = None
    description: str
    features: List[str]
    allows_custom_diagnosis: bool
    is_admin_only: bool = False

    @classmethod
    def from_plan(cls, plan: Plan) -> "PlanDTO":
        return cls(
            type=plan.type.value,
            name=plan.name,
            price=plan.price,
            price_label=format_plan_price(plan.price),
            qr_code_limit=plan.qr_code_limit,
            description=plan.description,
            features=list(plan.features),
            allows_custom_diagnosis=plan.allows_custom_diagnosis,
            is_admin_only=plan.is_admin_only,
        )


class PlanListResponseDTO(BaseModel):
    """Response DTO for plan listing"""

    plans: List[PlanDTO]


class ChangePlanCommandDTO(BaseModel):
    """
    Command DTO for administrative plan changes

    Used as input to ChangePlan use case.
    """

    clinic_id: str = Field(
        ...,
        min_length=1,
        description="Clinic identifier"
    )

    plan_type: str = Field(
        ...,
        min_length=1,
        description="Target plan tier"
    )


class SubscriptionResponseDTO(BaseModel):
    """Stored subscription record as returned by write use cases"""

    id: int
    clinic_id: str
    status: str
    plan_type: str
    trial_end: Optional[datetime] = None
    current_period_start: Optional[datetime] = None
    current_period_end: Optional[datetime] = None
    grace_period_end: Optional[datetime] = None
    canceled_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, subscription: Subscription) -> "SubscriptionResponseDTO":
        return cls(
            id=subscription.id,
            clinic_id=subscription.clinic_id,
            status=_stored_value(subscription.status),
            plan_type=_stored_value(subscription.plan_type),
            trial_end=subscription.trial_end,
            current_period_start=subscription.current_period_start,
            current_period_end=subscription.current_period_end,
            grace_period_end=subscription.grace_period_end,
            canceled_at=subscription.canceled_at,
            created_at=subscription.created_at,
            updated_at=subscription.updated_at,
        )


class SubscriptionSummaryDTO(BaseModel):
    """
    Billing page view of a clinic's subscription

    Resolved state plus the stored dates and plan display data.
    """

    clinic_id: str
    has_subscription: bool
    plan_name: str
    plan_amount: int
    trial_end: Optional[datetime] = None
    current_period_start: Optional[datetime] = None
    canceled_at: Optional[datetime] = None
    state: SubscriptionState
    available_plans: List[PlanDTO]
