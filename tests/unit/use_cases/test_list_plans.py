"""Unit tests for ListPlans use case"""

import pytest

from src.app.use_cases.subscription.list_plans import ListPlans


@pytest.mark.asyncio
class TestListPlans:
    async def test_public_plans_only_by_default(self):
        result = await ListPlans().execute()

        assert result.is_ok()
        types = [plan.type for plan in result.value.plans]
        assert types == ["starter", "standard", "custom", "managed"]

    async def test_include_admin_only(self):
        result = await ListPlans().execute(include_admin_only=True)

        plans = {plan.type: plan for plan in result.value.plans}
        assert "free" in plans
        assert plans["free"].is_admin_only is True
        assert plans["free"].price_label == "無料"

    async def test_price_labels(self):
        plans = {plan.type: plan for plan in (await ListPlans().execute()).value.plans}

        assert plans["starter"].price_label == "¥4,980/月（税別）"
        assert plans["starter"].qr_code_limit == 2
        assert plans["custom"].qr_code_limit is None
