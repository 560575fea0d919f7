from supabase import Client
from fastapi import HTTPException
from typing import Any, Dict, List, Optional

from app.modules.documents.schemas import DocumentResponse

_SEARCH_FIELDS = ("name", "mime_type", "storage_path")


def filter_documents(rows: List[Dict[str, Any]], search: Optional[str]) -> List[Dict[str, Any]]:
    """Case-insensitive substring match on name, mime type or storage path."""
    q = (search or "").strip().lower()
    if not q:
        return rows
    return [
        r for r in rows
        if any(q in (r.get(field) or "").lower() for field in _SEARCH_FIELDS)
    ]


class DocumentService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_documents(self, project_id: Optional[int] = None, search: Optional[str] = None) -> List[DocumentResponse]:
        """List documents, newest first, optionally for one project"""
        try:
            query = self.supabase.table("documents")\
                .select("*")\
                .order("created_at", desc=True)
            if project_id is not None:
                query = query.eq("project_id", project_id)
            result = query.execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        rows = filter_documents(result.data or [], search)
        return [DocumentResponse(**row) for row in rows]
