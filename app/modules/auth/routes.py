from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.modules.auth.schemas import CurrentUserResponse
from app.core.dependencies import get_current_user_id, lookup_unavailable
from app.core.errors import LookupFailure
from app.modules.profiles.service import ProfileService
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user(
    current_user: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase),
):
    """Get current authenticated user with profile role and admin flag (for frontend UI)."""
    try:
        role = ProfileService(supabase).get_profile_role(current_user["id"])
    except LookupFailure as e:
        raise lookup_unavailable(e)
    metadata_admin = (current_user.get("user_metadata") or {}).get("is_admin") is True
    return CurrentUserResponse(
        **current_user,
        role=role,
        is_admin=metadata_admin or role == "admin"
    )
