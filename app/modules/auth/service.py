import hashlib
import logging
import time
from supabase import Client, AuthError, AuthRetryableError
from fastapi import HTTPException
from typing import Dict, Any, Optional

from app.core.errors import IdentityLookupError

logger = logging.getLogger(__name__)

# In-memory cache for token lookups to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token; 401 when the token identifies nobody."""
        user_data = self.lookup_user(token)
        if user_data is None:
            raise HTTPException(status_code=401, detail="Invalid or expired token")
        return user_data

    def resolve_user_id(self, token: Optional[str]) -> Optional[str]:
        """Return the authenticated user id, or None when there is no valid session."""
        if not token:
            return None
        user_data = self.lookup_user(token)
        return user_data["id"] if user_data else None

    def lookup_user(self, token: str) -> Optional[Dict[str, Any]]:
        """Resolve a token to user data. Uses short TTL cache to reduce auth API calls.

        Returns None for tokens Supabase Auth rejects with a 4xx and raises
        IdentityLookupError when it cannot be reached or fails server-side.
        """
        cache_key = hashlib.sha256(token.encode()).hexdigest()
        now = time.monotonic()
        cached = _AUTH_USER_CACHE.get(cache_key)
        if cached is not None:
            user_data, expiry = cached
            if now < expiry:
                return user_data
            _AUTH_USER_CACHE.pop(cache_key, None)

        try:
            user_response = self.supabase.auth.get_user(jwt=token)
        except AuthRetryableError as e:
            logger.error(f"Auth provider unavailable: {e}")
            raise IdentityLookupError(str(e), step="auth") from e
        except AuthError as e:
            status = getattr(e, "status", None)
            if status is None or status >= 500:
                logger.error(f"Auth provider error: {e}")
                raise IdentityLookupError(str(e), step="auth") from e
            logger.debug(f"Token rejected by auth provider: {e}")
            return None
        except Exception as e:
            logger.error(f"Error getting current user: {e}")
            raise IdentityLookupError(str(e), step="auth") from e

        if not user_response or not user_response.user:
            return None
        user = user_response.user
        user_data = {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
            "app_metadata": user.app_metadata or {},
            "created_at": user.created_at,
            "updated_at": user.updated_at
        }
        if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
            _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
        return user_data


def clear_auth_cache():
    _AUTH_USER_CACHE.clear()
