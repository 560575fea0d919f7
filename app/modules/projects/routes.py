from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.projects.schemas import (
    ProjectCreate, ProjectUpdate, ProjectResponse, ProjectReportResponse, STATUS_LABELS
)
from app.modules.projects.service import ProjectService
from app.core.dependencies import require_page_permission
from supabase import Client
from typing import Dict, List, Optional

router = APIRouter(prefix="/projects", tags=["projects"])

PAGE_CODE = "projects"


def get_project_service(supabase: Client = Depends(get_supabase)) -> ProjectService:
    return ProjectService(supabase)


@router.get("", response_model=List[ProjectResponse])
async def list_projects(
    search: Optional[str] = None,
    limit: int = 10,
    offset: int = 0,
    user_data: Dict = Depends(require_page_permission(PAGE_CODE, "view")),
    service: ProjectService = Depends(get_project_service)
):
    """List projects, newest update first"""
    return service.list_projects(search=search, limit=limit, offset=offset)


@router.get("/statuses")
async def list_statuses(user_data: Dict = Depends(require_page_permission(PAGE_CODE, "view"))):
    """Project status options"""
    return [{"value": value, "label": label} for value, label in STATUS_LABELS.items()]


@router.get("/report", response_model=ProjectReportResponse)
async def project_report(
    user_data: Dict = Depends(require_page_permission(PAGE_CODE, "print")),
    service: ProjectService = Depends(get_project_service)
):
    """Printable project listing"""
    return service.project_report()


@router.post("", response_model=ProjectResponse, status_code=201)
async def create_project(
    project_data: ProjectCreate,
    user_data: Dict = Depends(require_page_permission(PAGE_CODE, "add")),
    service: ProjectService = Depends(get_project_service)
):
    """Create a new project"""
    return service.create_project(project_data)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    user_data: Dict = Depends(require_page_permission(PAGE_CODE, "view")),
    service: ProjectService = Depends(get_project_service)
):
    """Get project by ID"""
    return service.get_project(project_id)


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    project_data: ProjectUpdate,
    user_data: Dict = Depends(require_page_permission(PAGE_CODE, "edit")),
    service: ProjectService = Depends(get_project_service)
):
    """Update project"""
    return service.update_project(project_id, project_data)


@router.delete("/{project_id}", status_code=204)
async def delete_project(
    project_id: str,
    user_data: Dict = Depends(require_page_permission(PAGE_CODE, "delete")),
    service: ProjectService = Depends(get_project_service)
):
    """Delete project"""
    service.delete_project(project_id)
    return None
