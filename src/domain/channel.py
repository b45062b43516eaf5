"""Channel Domain Entity

A QR code distribution channel. Only counted here, against the plan quota.
"""

from datetime import datetime
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Boolean, String
from src.domain.base import BaseModel, generate_uuid


class Channel(BaseModel, table=True):
    """
    Channel - Trackable QR code owned by a clinic

    Domain Rules:
    - Every channel counts against the clinic's QR code quota,
      hidden ones included (a slot is freed only by hard deletion)
    - code is unique across clinics
    """

    __tablename__ = "channels"

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Channel identifier"
    )

    clinic_id: str = Field(
        index=True,
        description="Owning clinic ID"
    )

    name: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Display name"
    )

    code: str = Field(
        unique=True,
        description="Short code embedded in the QR URL"
    )

    diagnosis_type_slug: Optional[str] = Field(
        default=None,
        description="Diagnosis the QR code leads to"
    )

    is_hidden: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
        description="Soft-disabled flag (still counted against quota)"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Creation timestamp"
    )
