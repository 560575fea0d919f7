from pydantic import BaseModel, field_validator
from typing import Optional, List, Literal, Union
from datetime import datetime

ProjectStatus = Literal["open", "in_progress", "done"]

STATUS_LABELS = {
    "open": "Open",
    "in_progress": "In progress",
    "done": "Done",
}


def _clean_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("name must not be blank")
    return value


def _clean_description(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


class ProjectCreate(BaseModel):
    name: str
    description: Optional[str] = None
    status: ProjectStatus = "open"

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        return _clean_name(value)

    @field_validator("description")
    @classmethod
    def description_or_none(cls, value: Optional[str]) -> Optional[str]:
        return _clean_description(value)


class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[ProjectStatus] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return _clean_name(value)

    @field_validator("description")
    @classmethod
    def description_or_none(cls, value: Optional[str]) -> Optional[str]:
        return _clean_description(value)


class ProjectResponse(BaseModel):
    id: Union[int, str]
    name: str
    description: Optional[str] = None
    status: Optional[str] = "open"
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProjectReportRow(BaseModel):
    id: Union[int, str]
    name: str
    description: Optional[str] = None
    status: str
    status_label: str
    updated_at: Optional[datetime] = None


class ProjectReportResponse(BaseModel):
    generated_at: datetime
    total: int
    projects: List[ProjectReportRow]
