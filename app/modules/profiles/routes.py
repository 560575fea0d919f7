from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.profiles.schemas import (
    ProfileUpdate, ProfileRoleUpdate, ProfileResponse, ROLE_OPTIONS
)
from app.modules.profiles.service import ProfileService
from app.core.dependencies import get_current_user_id, require_admin
from supabase import Client
from typing import Dict, List, Optional

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Get the current user's profile"""
    return service.get_profile(user_data["id"])


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    profile_data: ProfileUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Update the current user's profile"""
    return service.update_profile(user_data["id"], profile_data)


@router.get("/roles")
async def list_role_options(user_data: Dict = Depends(get_current_user_id)):
    """Roles that can be assigned to a profile"""
    return ROLE_OPTIONS


@router.get("", response_model=List[ProfileResponse])
async def list_profiles(
    search: Optional[str] = None,
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """List profiles, optionally filtered by name or role"""
    return service.list_profiles(search)


@router.put("/{user_id}/role", response_model=ProfileResponse)
async def update_profile_role(
    user_id: str,
    role_data: ProfileRoleUpdate,
    user_data: Dict = Depends(require_admin),
    service: ProfileService = Depends(get_profile_service)
):
    """Change another user's role (admin only)"""
    return service.update_role(user_data["id"], user_id, role_data.role)
