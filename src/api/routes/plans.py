"""Plan API Routes"""

from fastapi import APIRouter, Query

from src.app.use_cases.subscription import ListPlans, PlanListResponseDTO

router = APIRouter(prefix="/billing/plans", tags=["Plans"])


@router.get("", response_model=PlanListResponseDTO)
async def list_plans(include_admin_only: bool = Query(default=False)):
    """List plan tiers. Admin-only tiers are hidden unless requested."""
    result = await ListPlans().execute(include_admin_only=include_admin_only)
    return result.value
