import logging
from datetime import datetime, timezone
from supabase import Client
from fastapi import HTTPException
from typing import Any, Dict, List, Optional

from app.core.errors import PermissionLookupError
from app.modules.profiles.schemas import ProfileUpdate, ProfileResponse

logger = logging.getLogger(__name__)

_DISPLAY_NAME_FIELDS = ("email", "username", "handle", "name", "full_name", "id")


def display_name_of(row: Dict[str, Any]) -> str:
    """First non-empty identifying field of a profile row."""
    for field in _DISPLAY_NAME_FIELDS:
        if row.get(field):
            return str(row[field])
    return ""


def filter_profiles(rows: List[Dict[str, Any]], search: Optional[str]) -> List[Dict[str, Any]]:
    """Case-insensitive substring match on display name or role."""
    q = (search or "").strip().lower()
    if not q:
        return rows
    return [
        r for r in rows
        if q in display_name_of(r).lower() or q in (r.get("role") or "").lower()
    ]


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile_role(self, user_id: str) -> Optional[str]:
        """Role column of the user's profile; None when no profile row exists."""
        try:
            result = self.supabase.table("profiles")\
                .select("role")\
                .eq("id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error getting profile role for {user_id}: {e}")
            raise PermissionLookupError(str(e), step="profiles") from e
        if not result.data:
            return None
        return result.data[0].get("role")

    def get_profile(self, user_id: str) -> ProfileResponse:
        """Get profile by user ID"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        if not result.data:
            raise HTTPException(status_code=404, detail="Profile not found")
        return ProfileResponse(**result.data[0])

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        """Update own profile fields (role is not editable here)"""
        update_data = {"updated_at": datetime.now(timezone.utc).isoformat()}
        if profile_data.username is not None:
            update_data["username"] = profile_data.username.strip()
        if profile_data.full_name is not None:
            update_data["full_name"] = profile_data.full_name.strip()
        if profile_data.avatar_url is not None:
            update_data["avatar_url"] = profile_data.avatar_url

        try:
            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        if not result.data:
            raise HTTPException(status_code=404, detail="Profile not found")
        return ProfileResponse(**result.data[0])

    def list_profiles(self, search: Optional[str] = None) -> List[ProfileResponse]:
        """List all visible profiles, filtered in-process by display name or role"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .order("id")\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        rows = filter_profiles(result.data or [], search)
        return [ProfileResponse(**row) for row in rows]

    def update_role(self, actor_id: str, target_user_id: str, role: str) -> ProfileResponse:
        """Change another user's role. Caller must already be verified as admin."""
        if actor_id == target_user_id:
            raise HTTPException(status_code=400, detail="You cannot change your own role")

        try:
            result = self.supabase.table("profiles")\
                .update({"role": role})\
                .eq("id", target_user_id)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        if not result.data:
            raise HTTPException(status_code=404, detail="Profile not found")
        logger.info(f"User {actor_id} set role of {target_user_id} to {role}")
        return ProfileResponse(**result.data[0])
