# app/services/dashboard_service.py
import datetime
from typing import Dict

from app.services.access import case_scope
from app.utils.helpers import utcnow

ACTIVE_STATUSES = ("approved", "under_review")


class DashboardService:
    def __init__(self, storage):
        self.storage = storage

    def stats_for(self, user) -> Dict[str, int]:
        if user.role == "client":
            return self._client_stats(user)
        if user.role == "lawyer":
            return self._lawyer_stats(user)
        return self._police_stats(user)

    def _client_stats(self, user) -> Dict[str, int]:
        cases = self.storage.list_cases(client_id=user.id)
        today = datetime.date.today()
        return {
            "active_cases": sum(1 for c in cases if c.status in ACTIVE_STATUSES),
            "pending_approvals": sum(1 for c in cases if c.status in ("submitted", "under_review")),
            "upcoming_hearings": sum(1 for c in cases if c.hearing_date and c.hearing_date > today),
            "total_cases": len(cases),
        }

    def _lawyer_stats(self, user) -> Dict[str, int]:
        cases = self.storage.list_cases(lawyer_id=user.id)
        pending = self.storage.list_case_requests(lawyer_id=user.id, status="pending")
        stats = user.stats
        return {
            "total_cases": len(cases),
            "active_cases": sum(1 for c in cases if c.status in ACTIVE_STATUSES),
            "pending_requests": len(pending),
            "won_cases": stats.won_cases if stats else 0,
            "lost_cases": stats.lost_cases if stats else 0,
        }

    def _police_stats(self, user) -> Dict[str, int]:
        cases = self.storage.list_cases(**case_scope(self.storage, user))
        midnight = datetime.datetime.combine(utcnow().date(), datetime.time.min)
        return {
            "pending_review": sum(1 for c in cases if c.status in ("submitted", "under_review")),
            "approved_today": sum(
                1 for c in cases if c.status == "approved" and c.updated_at and c.updated_at >= midnight
            ),
            "rejected_cases": sum(1 for c in cases if c.status == "rejected"),
        }
