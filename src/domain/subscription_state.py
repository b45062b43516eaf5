"""Derived Subscription State

Read-only projections computed from a Subscription and the current time.
Nothing in this module is ever persisted.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class LifecycleStatus(str, Enum):
    """Resolved lifecycle status

    Superset of the stored SubscriptionStatus: GRACE_PERIOD and EXPIRED
    only exist as computed values.
    """
    TRIAL = "trial"
    ACTIVE = "active"
    PAST_DUE = "past_due"
    CANCELED = "canceled"
    GRACE_PERIOD = "grace_period"
    EXPIRED = "expired"


class AlertSeverity(str, Enum):
    """Banner severity shown on the dashboard"""
    NONE = "none"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LifecycleOutcome(BaseModel):
    """
    Result of resolving a subscription against a point in time

    rule names the decision-table row that produced the outcome.
    """

    status: LifecycleStatus
    rule: str
    trial_days_left: Optional[int] = None
    grace_period_days_left: Optional[int] = None
    effective_period_end: Optional[datetime] = None
    stored_status: Optional[str] = None
    is_admin_override: bool = False

    class Config:
        frozen = True


class SubscriptionState(BaseModel):
    """
    Full entitlement snapshot for a clinic

    Rebuilt on every request; never cached or written back.
    """

    status: LifecycleStatus = Field(
        ...,
        description="Resolved lifecycle status"
    )

    plan_type: str = Field(
        ...,
        description="Plan tier whose limits apply right now"
    )

    is_active: bool = Field(
        ...,
        description="Whether the dashboard/service is usable"
    )

    can_create_qr_code: bool = Field(
        ...,
        description="Whether a new QR code may be created"
    )

    can_track_visitor_session: bool = Field(
        ...,
        description="Whether visitor sessions are recorded"
    )

    can_create_custom_diagnosis: bool = Field(
        ...,
        description="Whether custom diagnoses may be authored"
    )

    trial_days_left: Optional[int] = Field(
        default=None,
        description="Days left in the trial (rounded up)"
    )

    grace_period_days_left: Optional[int] = Field(
        default=None,
        description="Days left in the grace period (rounded up)"
    )

    current_period_end: Optional[datetime] = Field(
        default=None,
        description="End of the window currently granting access"
    )

    qr_code_limit: Optional[int] = Field(
        default=None,
        description="QR code quota (None = unlimited)"
    )

    qr_code_count: int = Field(
        default=0,
        description="QR codes the clinic currently has"
    )

    remaining_qr_codes: Optional[int] = Field(
        default=None,
        description="QR codes that can still be created (None = unlimited)"
    )

    message: Optional[str] = Field(
        default=None,
        description="Banner message"
    )

    alert_severity: AlertSeverity = Field(
        default=AlertSeverity.NONE,
        description="Banner severity"
    )

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "status": "trial",
                "plan_type": "starter",
                "is_active": True,
                "can_create_qr_code": True,
                "can_track_visitor_session": True,
                "can_create_custom_diagnosis": False,
                "trial_days_left": 5,
                "grace_period_days_left": None,
                "current_period_end": "2024-01-15T00:00:00",
                "qr_code_limit": 2,
                "qr_code_count": 1,
                "remaining_qr_codes": 1,
                "message": "無料トライアル期間は残り5日です。",
                "alert_severity": "info"
            }
        }
