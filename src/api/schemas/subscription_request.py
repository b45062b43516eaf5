"""Request schemas for Subscription API

Pydantic models for validating incoming HTTP requests.
"""

from pydantic import BaseModel, Field, field_validator

from src.domain.plan import parse_plan_type


class ChangePlanRequestSchema(BaseModel):
    """
    Request schema for changing a clinic's plan

    Used for PUT /billing/subscription/{clinic_id}/plan endpoint.
    """

    plan_type: str = Field(
        ...,
        min_length=1,
        description="Target plan tier (starter, standard, custom, managed, free)"
    )

    @field_validator('plan_type')
    @classmethod
    def validate_plan_type(cls, v):
        """Only catalog tiers are accepted"""
        if parse_plan_type(v) is None:
            raise ValueError(f"Unknown plan type: {v}")
        return v

    class Config:
        json_schema_extra = {
            "example": {
                "plan_type": "standard"
            }
        }
