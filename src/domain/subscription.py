"""Subscription Domain Entity

Billing record for a clinic. Each clinic has at most one subscription.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import BigInteger, Integer, String, DateTime
from src.domain.base import BaseModel


class SubscriptionStatus(str, Enum):
    """Stored subscription status values

    grace_period and expired are never stored; they are derived from
    timestamps at read time (see LifecycleStatus).
    """
    TRIAL = "trial"
    ACTIVE = "active"
    PAST_DUE = "past_due"
    CANCELED = "canceled"


class Subscription(BaseModel, table=True):
    """
    Subscription - Clinic billing record

    Domain Rules:
    - One subscription per clinic (clinic_id is unique)
    - Created at signup with status=trial and trial_end = now + trial duration
    - Status transitions are driven by billing webhooks and admin plan changes
    - current_period_end of None means the period is unbounded
    - grace_period_end of None means the grace end is derived from the
      reference end date plus the grace period constant
    - status and plan_type are kept as plain strings so that unrecognised
      stored values still load and can be failed closed by the resolver
    """

    __tablename__ = "subscriptions"
    __table_args__ = (
        Index('ix_subscriptions_status', 'status'),
    )

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(
            BigInteger().with_variant(Integer, "sqlite"),
            primary_key=True,
            autoincrement=True,
        ),
        description="Unique subscription identifier (auto-increment)"
    )

    clinic_id: str = Field(
        index=True,
        unique=True,
        description="Clinic ID (unique - one subscription per clinic)"
    )

    status: str = Field(
        default=SubscriptionStatus.TRIAL.value,
        sa_column=Column(String(20), nullable=False),
        description="Stored status (trial, active, past_due, canceled)"
    )

    plan_type: str = Field(
        default="starter",
        sa_column=Column(String(20), nullable=False),
        description="Plan tier identifier"
    )

    trial_end: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime, nullable=True),
        description="End of the trial window"
    )

    current_period_start: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime, nullable=True),
        description="Start of the current billing period"
    )

    current_period_end: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime, nullable=True),
        description="End of the current billing period (None = unbounded)"
    )

    grace_period_end: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime, nullable=True),
        description="Explicit grace end (None = derived)"
    )

    canceled_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime, nullable=True),
        description="When the clinic canceled"
    )

    payjp_customer_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Payment provider customer ID"
    )

    payjp_subscription_id: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="Payment provider subscription ID"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Subscription creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": 1,
                "clinic_id": "clinic_abc123",
                "status": "trial",
                "plan_type": "starter",
                "trial_end": "2024-01-15T00:00:00Z",
                "current_period_start": None,
                "current_period_end": None,
                "grace_period_end": None,
                "canceled_at": None,
                "created_at": "2024-01-01T00:00:00Z",
                "updated_at": "2024-01-01T00:00:00Z"
            }
        }
