"""Dashboard API — summary counts and cost estimates."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from printcare.db.store import CatalogStore
from printcare.dependencies import get_store
from printcare.schemas import DashboardSummary
from printcare.services.cost_estimator import estimate_cost
from printcare.services.dashboard import build_summary

router = APIRouter(prefix="/api", tags=["dashboard"])


@router.get("/dashboard/summary", response_model=DashboardSummary)
async def dashboard_summary(store: CatalogStore = Depends(get_store)):
    return await build_summary(store)


@router.get("/cost-estimate")
async def cost_estimate(category: str = Query("")):
    return {"category": category, "estimated_cost": estimate_cost(category)}
