from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.documents.schemas import DocumentResponse
from app.modules.documents.service import DocumentService
from app.core.dependencies import require_page_permission
from supabase import Client
from typing import Dict, List, Optional

router = APIRouter(prefix="/documents", tags=["documents"])


def get_document_service(supabase: Client = Depends(get_supabase)) -> DocumentService:
    return DocumentService(supabase)


@router.get("", response_model=List[DocumentResponse])
async def list_documents(
    project_id: Optional[int] = None,
    search: Optional[str] = None,
    user_data: Dict = Depends(require_page_permission("documents", "view")),
    service: DocumentService = Depends(get_document_service)
):
    """List documents, optionally filtered by project and searched by name, type or path"""
    return service.list_documents(project_id=project_id, search=search)
