from pydantic import BaseModel
from typing import Optional, Dict, Any
from datetime import datetime


class CurrentUserResponse(BaseModel):
    id: str
    email: Optional[str] = None
    user_metadata: Dict[str, Any] = {}
    app_metadata: Dict[str, Any] = {}
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    role: Optional[str] = None  # profiles.role: admin | editor | user
    is_admin: bool = False
