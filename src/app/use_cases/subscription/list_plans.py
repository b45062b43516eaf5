"""List Plans Use Case

Read-only listing of the plan catalog.
"""

from libs.result import Result, Return
from src.domain.plan import get_all_plans, get_public_plans
from .dtos import PlanDTO, PlanListResponseDTO


class ListPlans:
    """
    Use case: List plan tiers

    Admin-only tiers are excluded unless explicitly requested.
    """

    async def execute(self, include_admin_only: bool = False) -> Result[PlanListResponseDTO]:
        plans = get_all_plans() if include_admin_only else get_public_plans()
        return Return.ok(
            PlanListResponseDTO(plans=[PlanDTO.from_plan(plan) for plan in plans])
        )
