"""Subscription domain use cases"""
from .get_subscription_state import GetSubscriptionState
from .get_subscription_summary import GetSubscriptionSummary
from .check_subscription_simple import CheckSubscriptionSimple
from .can_track_visitor_session import CanTrackVisitorSession
from .can_create_qr_code import CanCreateQRCode
from .can_create_custom_diagnosis import CanCreateCustomDiagnosis
from .list_plans import ListPlans
from .start_trial import StartTrial
from .change_plan import ChangePlan
from .dtos import (
    SimpleSubscriptionCheckDTO,
    QRCodeQuotaDTO,
    CustomDiagnosisPermissionDTO,
    TrackingGateResponseDTO,
    PlanDTO,
    PlanListResponseDTO,
    ChangePlanCommandDTO,
    SubscriptionResponseDTO,
    SubscriptionSummaryDTO,
)
