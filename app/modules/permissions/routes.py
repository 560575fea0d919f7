from fastapi import APIRouter, Depends, HTTPException
from app.core.dependencies import (
    get_current_user_id, get_optional_user_id, get_permission_resolver, lookup_unavailable
)
from app.core.errors import LookupFailure
from app.modules.permissions.schemas import (
    PagePermissionResponse, PageActionResponse, PageResponse, normalize_action
)
from app.modules.permissions.service import PermissionResolver
from typing import Dict, List, Optional

router = APIRouter(prefix="/permissions", tags=["permissions"])
pages_router = APIRouter(prefix="/pages", tags=["permissions"])


@pages_router.get("", response_model=List[PageResponse])
async def list_pages(
    user_data: Dict = Depends(get_current_user_id),
    resolver: PermissionResolver = Depends(get_permission_resolver)
):
    """List all gated pages"""
    try:
        return resolver.list_pages()
    except LookupFailure as e:
        raise lookup_unavailable(e)


@router.get("/{page_code}", response_model=PagePermissionResponse)
async def get_page_permissions(
    page_code: str,
    user_id: Optional[str] = Depends(get_optional_user_id),
    resolver: PermissionResolver = Depends(get_permission_resolver)
):
    """Effective capability flags of the caller on a page. Anonymous callers get all-false."""
    try:
        perms = resolver.resolve(page_code, user_id)
    except LookupFailure as e:
        raise lookup_unavailable(e)
    return PagePermissionResponse(
        page_code=page_code,
        permissions=perms,
        allowed_actions=perms.allowed_actions()
    )


@router.get("/{page_code}/can/{action}", response_model=PageActionResponse)
async def check_page_action(
    page_code: str,
    action: str,
    user_id: Optional[str] = Depends(get_optional_user_id),
    resolver: PermissionResolver = Depends(get_permission_resolver)
):
    """Whether the caller may perform one action on a page"""
    if normalize_action(action) is None:
        raise HTTPException(status_code=400, detail=f"Unknown action: {action}")
    try:
        perms = resolver.resolve(page_code, user_id)
    except LookupFailure as e:
        raise lookup_unavailable(e)
    return PageActionResponse(page_code=page_code, action=action, allowed=perms.can(action))
