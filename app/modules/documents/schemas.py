from pydantic import BaseModel
from typing import Optional, Union
from datetime import datetime


class DocumentResponse(BaseModel):
    id: Union[int, str]
    project_id: Optional[Union[int, str]] = None
    name: str
    mime_type: Optional[str] = None
    size_bytes: Optional[int] = None
    storage_path: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
