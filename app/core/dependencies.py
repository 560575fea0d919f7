"""
Core dependencies for route protection and page permission checking
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.core.errors import LookupFailure
from app.database.supabase_client import get_supabase
from app.modules.auth.service import AuthService
from app.modules.permissions.schemas import EffectivePermission, normalize_action
from app.modules.permissions.service import PermissionResolver
from app.modules.profiles.service import ProfileService
from supabase import Client
from typing import Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()
optional_security = HTTPBearer(auto_error=False)


def _get_request_cache(request: Request) -> Dict[str, Any]:
    """Return request-scoped cache for access data (effective permissions per page code, admin flag)."""
    if not hasattr(request.state, "access_cache"):
        request.state.access_cache = {}
    return request.state.access_cache


def lookup_unavailable(exc: LookupFailure) -> HTTPException:
    """503 for lookups that failed, so clients can tell it apart from a 403."""
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail=f"Could not determine access: {exc.message}"
    )


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_permission_resolver(supabase: Client = Depends(get_supabase)) -> PermissionResolver:
    return PermissionResolver(supabase)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    try:
        return auth_service.get_current_user(credentials.credentials)
    except LookupFailure as e:
        raise lookup_unavailable(e)


def get_optional_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(optional_security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Optional[str]:
    """User id of the bearer, or None when the request carries no valid session"""
    token = credentials.credentials if credentials else None
    try:
        return auth_service.resolve_user_id(token)
    except LookupFailure as e:
        raise lookup_unavailable(e)


def is_admin(user_data: dict, supabase: Client) -> bool:
    """Admin if user_metadata.is_admin is set or the profile role is 'admin'"""
    user_metadata = user_data.get("user_metadata") or {}
    if user_metadata.get("is_admin") is True:
        return True
    return ProfileService(supabase).get_profile_role(user_data["id"]) == "admin"


def get_page_permission(
    page_code: str,
    user_id: Optional[str],
    resolver: PermissionResolver,
    cache: Optional[Dict[str, Any]] = None
) -> EffectivePermission:
    """Resolve effective permission, memoized per page code in the request-scoped cache."""
    if cache is not None:
        page_cache = cache.setdefault("page_permissions", {})
        if page_code in page_cache:
            return page_cache[page_code]
    perms = resolver.resolve(page_code, user_id)
    if cache is not None:
        page_cache[page_code] = perms
    return perms


def require_page_permission(page_code: str, action: str):
    """Factory function to create a page capability check dependency"""
    flag = normalize_action(action)
    if flag is None:
        raise ValueError(f"Unknown action: {action}")

    def check_page_permission(
        request: Request,
        user_data: dict = Depends(get_current_user_id),
        resolver: PermissionResolver = Depends(get_permission_resolver)
    ) -> dict:
        """Dependency to check if user holds the capability on the page"""
        cache = _get_request_cache(request)
        try:
            perms = get_page_permission(page_code, user_data["id"], resolver, cache)
        except LookupFailure as e:
            raise lookup_unavailable(e)
        if not perms.can(flag):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {flag} on {page_code}"
            )
        return user_data
    return check_page_permission


def require_admin(
    request: Request,
    user_data: dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase)
) -> dict:
    """Dependency to check that the current user is an admin"""
    cache = _get_request_cache(request)
    if "is_admin" not in cache:
        try:
            cache["is_admin"] = is_admin(user_data, supabase)
        except LookupFailure as e:
            raise lookup_unavailable(e)
    if not cache["is_admin"]:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only admins can perform this action"
        )
    return user_data
