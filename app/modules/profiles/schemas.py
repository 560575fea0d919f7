from pydantic import BaseModel
from typing import Optional, Literal
from datetime import datetime

ProfileRole = Literal["admin", "editor", "user"]

ROLE_OPTIONS = [
    {"value": "admin", "label": "Admin"},
    {"value": "editor", "label": "Editor"},
    {"value": "user", "label": "User"},
]


class ProfileUpdate(BaseModel):
    username: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None


class ProfileRoleUpdate(BaseModel):
    role: ProfileRole


class ProfileResponse(BaseModel):
    id: str
    email: Optional[str] = None
    username: Optional[str] = None
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    role: Optional[str] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
