from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.dashboard.schemas import DashboardSummary
from app.modules.dashboard.service import DashboardService
from app.core.dependencies import require_page_permission
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_dashboard_service(supabase: Client = Depends(get_supabase)) -> DashboardService:
    return DashboardService(supabase)


@router.get("", response_model=DashboardSummary)
async def get_dashboard(
    user_data: Dict = Depends(require_page_permission("dashboard", "view")),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Project and document summary"""
    return service.summary()
