"""Subscription API Routes

FastAPI routes exposing subscription state and entitlement checks.
"""

from datetime import datetime
from typing import Callable

from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from libs.result import Result
from src.adapter.repositories.channel_repository import SqlAlchemyChannelRepository
from src.adapter.repositories.subscription_repository import SqlAlchemySubscriptionRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.api.error import ClientError
from src.api.schemas.subscription_request import ChangePlanRequestSchema
from src.app.services.lifecycle_resolver import LifecyclePolicy
from src.app.services.subscription_resolver import SubscriptionResolver
from src.app.use_cases.subscription import (
    CanCreateCustomDiagnosis,
    CanCreateQRCode,
    CanTrackVisitorSession,
    ChangePlan,
    CheckSubscriptionSimple,
    GetSubscriptionSummary,
    StartTrial,
    ChangePlanCommandDTO,
    CustomDiagnosisPermissionDTO,
    QRCodeQuotaDTO,
    SimpleSubscriptionCheckDTO,
    SubscriptionResponseDTO,
    SubscriptionSummaryDTO,
    TrackingGateResponseDTO,
)
from src.depends import get_clock, get_lifecycle_policy, get_session, get_subscription_resolver

router = APIRouter(prefix="/billing/subscription", tags=["Subscription"])

ERROR_STATUS_CODES = {
    "SUBSCRIPTION_FETCH_FAILED": status.HTTP_503_SERVICE_UNAVAILABLE,
    "CHANNEL_COUNT_FAILED": status.HTTP_503_SERVICE_UNAVAILABLE,
    "SUBSCRIPTION_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "SUBSCRIPTION_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "START_TRIAL_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
    "CHANGE_PLAN_FAILED": status.HTTP_500_INTERNAL_SERVER_ERROR,
}

FETCH_ERROR_RESPONSE = {
    503: {
        "description": "Subscription data could not be fetched",
        "content": {
            "application/json": {
                "example": {
                    "error": {
                        "code": "SUBSCRIPTION_FETCH_FAILED",
                        "message": "Failed to fetch subscription for clinic clinic_abc123"
                    }
                }
            }
        }
    }
}


def unwrap(result: Result):
    """Return the value or raise the matching ClientError"""
    if result.is_err():
        raise ClientError(
            result.error,
            status_code=ERROR_STATUS_CODES.get(result.error.code, status.HTTP_400_BAD_REQUEST),
        )
    return result.value


@router.get(
    "/{clinic_id}",
    response_model=SubscriptionSummaryDTO,
    responses=FETCH_ERROR_RESPONSE,
)
async def get_subscription(
    clinic_id: str,
    session: AsyncSession = Depends(get_session),
    resolver: SubscriptionResolver = Depends(get_subscription_resolver),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """
    Subscription summary for the billing page.

    A clinic without a subscription is returned with
    `has_subscription=false` and the restrictive expired state.
    """
    use_case = GetSubscriptionSummary(
        SqlAlchemySubscriptionRepository(session),
        SqlAlchemyChannelRepository(session),
        resolver,
        clock,
    )
    return unwrap(await use_case.execute(clinic_id))


@router.get(
    "/{clinic_id}/simple",
    response_model=SimpleSubscriptionCheckDTO,
    responses=FETCH_ERROR_RESPONSE,
)
async def check_subscription_simple(
    clinic_id: str,
    session: AsyncSession = Depends(get_session),
    resolver: SubscriptionResolver = Depends(get_subscription_resolver),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """Legacy reduced view (grace and expired reported as `suspended`)."""
    use_case = CheckSubscriptionSimple(SqlAlchemySubscriptionRepository(session), resolver, clock)
    return unwrap(await use_case.execute(clinic_id))


@router.get(
    "/{clinic_id}/qr-quota",
    response_model=QRCodeQuotaDTO,
    responses=FETCH_ERROR_RESPONSE,
)
async def check_qr_code_quota(
    clinic_id: str,
    session: AsyncSession = Depends(get_session),
    resolver: SubscriptionResolver = Depends(get_subscription_resolver),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """Whether the clinic may create another QR code."""
    use_case = CanCreateQRCode(
        SqlAlchemySubscriptionRepository(session),
        SqlAlchemyChannelRepository(session),
        resolver,
        clock,
    )
    return unwrap(await use_case.execute(clinic_id))


@router.get(
    "/{clinic_id}/custom-diagnosis",
    response_model=CustomDiagnosisPermissionDTO,
    responses=FETCH_ERROR_RESPONSE,
)
async def check_custom_diagnosis(
    clinic_id: str,
    session: AsyncSession = Depends(get_session),
    resolver: SubscriptionResolver = Depends(get_subscription_resolver),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """Whether the clinic may author custom diagnoses."""
    use_case = CanCreateCustomDiagnosis(
        SqlAlchemySubscriptionRepository(session),
        SqlAlchemyChannelRepository(session),
        resolver,
        clock,
    )
    return unwrap(await use_case.execute(clinic_id))


@router.get(
    "/{clinic_id}/tracking",
    response_model=TrackingGateResponseDTO,
    responses=FETCH_ERROR_RESPONSE,
)
async def check_tracking(
    clinic_id: str,
    session: AsyncSession = Depends(get_session),
    resolver: SubscriptionResolver = Depends(get_subscription_resolver),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """Visitor tracking gate. Reads the subscription only."""
    use_case = CanTrackVisitorSession(SqlAlchemySubscriptionRepository(session), resolver, clock)
    can_track = unwrap(await use_case.execute(clinic_id))
    return TrackingGateResponseDTO(clinic_id=clinic_id, can_track=can_track)


@router.post(
    "/{clinic_id}/trial",
    response_model=SubscriptionResponseDTO,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {
            "description": "Clinic already has a subscription",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "SUBSCRIPTION_ALREADY_EXISTS",
                            "message": "Clinic clinic_abc123 already has a subscription"
                        }
                    }
                }
            }
        }
    }
)
async def start_trial(
    clinic_id: str,
    session: AsyncSession = Depends(get_session),
    policy: LifecyclePolicy = Depends(get_lifecycle_policy),
    clock: Callable[[], datetime] = Depends(get_clock),
):
    """Create the clinic's trial subscription at signup."""
    use_case = StartTrial(
        SqlAlchemyUnitOfWork(session),
        SqlAlchemySubscriptionRepository(session),
        policy,
        clock,
    )
    return unwrap(await use_case.execute(clinic_id))


@router.put(
    "/{clinic_id}/plan",
    response_model=SubscriptionResponseDTO,
    responses={
        404: {
            "description": "Clinic has no subscription",
            "content": {
                "application/json": {
                    "example": {
                        "error": {
                            "code": "SUBSCRIPTION_NOT_FOUND",
                            "message": "No subscription found for clinic clinic_abc123"
                        }
                    }
                }
            }
        }
    }
)
async def change_plan(
    clinic_id: str,
    request: ChangePlanRequestSchema,
    session: AsyncSession = Depends(get_session),
):
    """
    Administrative plan change.

    Assigning `free` also sets the stored status to `active`.
    """
    use_case = ChangePlan(SqlAlchemyUnitOfWork(session), SqlAlchemySubscriptionRepository(session))
    command = ChangePlanCommandDTO(clinic_id=clinic_id, plan_type=request.plan_type)
    return unwrap(await use_case.execute(command))
