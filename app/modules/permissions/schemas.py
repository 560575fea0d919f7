from pydantic import BaseModel
from typing import Optional, List, Union

# Short action names accepted by the API, mapped to their capability flag
ACTIONS = {
    "view": "can_view",
    "add": "can_add",
    "edit": "can_edit",
    "delete": "can_delete",
    "print": "can_print",
}


def normalize_action(action: str) -> Optional[str]:
    """Map "edit" or "can_edit" to "can_edit"; None for anything else."""
    if action in ACTIONS:
        return ACTIONS[action]
    if action in ACTIONS.values():
        return action
    return None


class EffectivePermission(BaseModel):
    can_view: bool = False
    can_add: bool = False
    can_edit: bool = False
    can_delete: bool = False
    can_print: bool = False

    def can(self, action: str) -> bool:
        flag = normalize_action(action)
        if flag is None:
            return False
        return bool(getattr(self, flag))

    def allowed_actions(self) -> List[str]:
        return [name for name, flag in ACTIONS.items() if getattr(self, flag)]


class PagePermissionResponse(BaseModel):
    page_code: str
    permissions: EffectivePermission
    allowed_actions: List[str]


class PageActionResponse(BaseModel):
    page_code: str
    action: str
    allowed: bool


class PageResponse(BaseModel):
    id: Union[int, str]
    code: str
    name: Optional[str] = None
    description: Optional[str] = None

    class Config:
        from_attributes = True
