import logging
from datetime import datetime, timezone
from supabase import Client
from fastapi import HTTPException
from typing import List, Optional

from app.modules.projects.schemas import (
    ProjectCreate, ProjectUpdate, ProjectResponse,
    ProjectReportRow, ProjectReportResponse, STATUS_LABELS
)

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_projects(self, search: Optional[str] = None, limit: int = 10, offset: int = 0) -> List[ProjectResponse]:
        """List projects, most recently updated first, optionally filtered by name"""
        try:
            query = self.supabase.table("projects")\
                .select("*")\
                .order("updated_at", desc=True)
            if search and search.strip():
                query = query.ilike("name", f"%{search.strip()}%")
            result = query.limit(limit).offset(offset).execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        return [ProjectResponse(**project) for project in (result.data or [])]

    def get_project(self, project_id: str) -> ProjectResponse:
        """Get project by ID"""
        try:
            result = self.supabase.table("projects")\
                .select("*")\
                .eq("id", project_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        if not result.data:
            raise HTTPException(status_code=404, detail="Project not found")
        return ProjectResponse(**result.data[0])

    def create_project(self, project_data: ProjectCreate) -> ProjectResponse:
        """Create a new project"""
        payload = {
            "name": project_data.name,
            "description": project_data.description,
            "status": project_data.status
        }
        try:
            result = self.supabase.table("projects").insert(payload).execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        if not result.data:
            raise HTTPException(status_code=500, detail="Failed to create project")
        logger.info(f"Created project {result.data[0].get('id')}")
        return ProjectResponse(**result.data[0])

    def update_project(self, project_id: str, project_data: ProjectUpdate) -> ProjectResponse:
        """Update the fields that were sent"""
        update_data = project_data.model_dump(exclude_unset=True)
        if "name" in update_data and update_data["name"] is None:
            raise HTTPException(status_code=400, detail="name must not be null")
        if "status" in update_data and update_data["status"] is None:
            raise HTTPException(status_code=400, detail="status must not be null")
        update_data["updated_at"] = datetime.now(timezone.utc).isoformat()

        try:
            result = self.supabase.table("projects")\
                .update(update_data)\
                .eq("id", project_id)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        if not result.data:
            raise HTTPException(status_code=404, detail="Project not found")
        return ProjectResponse(**result.data[0])

    def delete_project(self, project_id: str) -> bool:
        """Delete project"""
        try:
            result = self.supabase.table("projects")\
                .delete()\
                .eq("id", project_id)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        if not result.data:
            raise HTTPException(status_code=404, detail="Project not found")
        logger.info(f"Deleted project {project_id}")
        return True

    def project_report(self) -> ProjectReportResponse:
        """Printable listing of every visible project"""
        try:
            result = self.supabase.table("projects")\
                .select("id,name,description,status,updated_at")\
                .order("updated_at", desc=True)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        rows = []
        for project in result.data or []:
            status = project.get("status") or "open"
            rows.append(ProjectReportRow(
                id=project["id"],
                name=project["name"],
                description=project.get("description"),
                status=status,
                status_label=STATUS_LABELS.get(status, status),
                updated_at=project.get("updated_at")
            ))
        return ProjectReportResponse(
            generated_at=datetime.now(timezone.utc),
            total=len(rows),
            projects=rows
        )
