import logging
from datetime import datetime, timedelta, timezone
from supabase import Client
from fastapi import HTTPException
from typing import Any, Dict, Iterable, Mapping

from app.modules.dashboard.schemas import DashboardSummary, RecentProject, RecentDocument

logger = logging.getLogger(__name__)

RECENT_LIMIT = 5
SIZE_SCAN_LIMIT = 10000


def count_by_status(rows: Iterable[Mapping[str, Any]]) -> Dict[str, int]:
    """Tally project rows per status; a missing status counts as open."""
    counts = {"open": 0, "in_progress": 0, "done": 0}
    for row in rows:
        status = row.get("status") or "open"
        counts[status] = counts.get(status, 0) + 1
    return counts


def total_bytes(rows: Iterable[Mapping[str, Any]]) -> int:
    total = 0
    for row in rows:
        try:
            total += int(row.get("size_bytes") or 0)
        except (TypeError, ValueError):
            continue
    return total


class DashboardService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def summary(self) -> DashboardSummary:
        """Counts and recent activity for projects and documents"""
        week_ago = (datetime.now(timezone.utc) - timedelta(days=7)).isoformat()
        try:
            project_count = self.supabase.table("projects")\
                .select("id", count="exact")\
                .limit(1)\
                .execute()
            statuses = self.supabase.table("projects")\
                .select("status")\
                .execute()
            recent_projects = self.supabase.table("projects")\
                .select("id,name,status,updated_at")\
                .order("updated_at", desc=True)\
                .limit(RECENT_LIMIT)\
                .execute()
            document_count = self.supabase.table("documents")\
                .select("id", count="exact")\
                .limit(1)\
                .execute()
            documents_week = self.supabase.table("documents")\
                .select("id", count="exact")\
                .gte("created_at", week_ago)\
                .limit(1)\
                .execute()
            sizes = self.supabase.table("documents")\
                .select("size_bytes")\
                .limit(SIZE_SCAN_LIMIT)\
                .execute()
            recent_documents = self.supabase.table("documents")\
                .select("id,name,mime_type,project_id,created_at")\
                .order("created_at", desc=True)\
                .limit(RECENT_LIMIT)\
                .execute()
        except Exception as e:
            logger.error(f"Error building dashboard summary: {e}")
            raise HTTPException(status_code=500, detail=str(e))

        return DashboardSummary(
            project_count=project_count.count or 0,
            projects_by_status=count_by_status(statuses.data or []),
            recent_projects=[RecentProject(**p) for p in (recent_projects.data or [])],
            document_count=document_count.count or 0,
            documents_last_7_days=documents_week.count or 0,
            document_total_bytes=total_bytes(sizes.data or []),
            recent_documents=[RecentDocument(**d) for d in (recent_documents.data or [])]
        )
