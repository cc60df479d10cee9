# app/api/routes/dashboard.py
from typing import Dict

from fastapi import APIRouter, Depends

from app.core.dependencies import get_current_user, get_storage
from app.services.dashboard_service import DashboardService

router = APIRouter()


@router.get("/stats", response_model=Dict[str, int])
def dashboard_stats(storage=Depends(get_storage), current_user=Depends(get_current_user)):
    svc = DashboardService(storage)
    return svc.stats_for(current_user)
