import logging
from functools import reduce
from typing import Any, Dict, Iterable, List, Mapping, Optional

from supabase import Client

from app.config.pages_config import CAPABILITY_FLAGS
from app.core.errors import PermissionLookupError
from app.modules.permissions.schemas import EffectivePermission, PageResponse

logger = logging.getLogger(__name__)


def _or_flags(acc: Dict[str, bool], row: Mapping[str, Any]) -> Dict[str, bool]:
    return {flag: acc[flag] or bool(row.get(flag)) for flag in CAPABILITY_FLAGS}


def merge_permissions(rows: Iterable[Mapping[str, Any]]) -> EffectivePermission:
    """OR each capability flag across role_permissions rows.

    Order of rows does not matter; an empty sequence gives all-false.
    """
    merged = reduce(_or_flags, rows, {flag: False for flag in CAPABILITY_FLAGS})
    return EffectivePermission(**merged)


class PermissionResolver:
    """Computes a user's effective capabilities on a page from their roles."""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def resolve(self, page_code: str, user_id: Optional[str]) -> EffectivePermission:
        """Return the union of capability flags granted to user_id on page_code.

        Unknown page, anonymous user, no roles and no matching rows all give
        all-false. Store failures raise PermissionLookupError.
        """
        if not page_code or not page_code.strip():
            raise ValueError("page_code must be a non-empty string")

        if not user_id:
            logger.debug(f"No authenticated user; denying all on page {page_code}")
            return EffectivePermission()

        page_id = self.get_page_id(page_code)
        if page_id is None:
            logger.debug(f"Page {page_code} is not defined")
            return EffectivePermission()

        role_ids = self.get_role_ids(user_id)
        if not role_ids:
            logger.debug(f"User {user_id} has no roles")
            return EffectivePermission()

        rows = self.get_role_permission_rows(page_id, role_ids)
        return merge_permissions(rows)

    def get_page_id(self, page_code: str) -> Optional[Any]:
        try:
            result = self.supabase.table("pages")\
                .select("id")\
                .eq("code", page_code)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error looking up page {page_code}: {e}")
            raise PermissionLookupError(str(e), step="pages") from e
        if not result.data:
            return None
        return result.data[0]["id"]

    def get_role_ids(self, user_id: str) -> List[Any]:
        try:
            result = self.supabase.table("user_roles")\
                .select("role_id")\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            logger.error(f"Error getting roles for user {user_id}: {e}")
            raise PermissionLookupError(str(e), step="user_roles") from e
        return [r["role_id"] for r in (result.data or [])]

    def get_role_permission_rows(self, page_id: Any, role_ids: List[Any]) -> List[Dict[str, Any]]:
        try:
            result = self.supabase.table("role_permissions")\
                .select("*")\
                .eq("page_id", page_id)\
                .in_("role_id", role_ids)\
                .execute()
        except Exception as e:
            logger.error(f"Error getting role permissions for page {page_id}: {e}")
            raise PermissionLookupError(str(e), step="role_permissions") from e
        return result.data or []

    def list_pages(self) -> List[PageResponse]:
        try:
            result = self.supabase.table("pages")\
                .select("*")\
                .order("code")\
                .execute()
        except Exception as e:
            logger.error(f"Error listing pages: {e}")
            raise PermissionLookupError(str(e), step="pages") from e
        return [PageResponse(**page) for page in (result.data or [])]
