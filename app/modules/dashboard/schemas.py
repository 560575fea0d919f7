from pydantic import BaseModel
from typing import Optional, List, Dict, Union
from datetime import datetime


class RecentProject(BaseModel):
    id: Union[int, str]
    name: str
    status: Optional[str] = None
    updated_at: Optional[datetime] = None


class RecentDocument(BaseModel):
    id: Union[int, str]
    name: str
    mime_type: Optional[str] = None
    project_id: Optional[Union[int, str]] = None
    created_at: Optional[datetime] = None


class DashboardSummary(BaseModel):
    project_count: int
    projects_by_status: Dict[str, int]
    recent_projects: List[RecentProject]
    document_count: int
    documents_last_7_days: int
    document_total_bytes: int
    recent_documents: List[RecentDocument]
