from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime

from app.schemas.users.permission_schemas import PermissionOut


class RoleCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    permission_ids: List[int] = Field(default_factory=list)


class RoleUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = None


class RolePermissionsPayload(BaseModel):
    permission_ids: List[int]


class RoleOut(BaseModel):
    id: int
    name: str
    description: Optional[str]
    client_id: Optional[int]
    scope: Literal["global", "client"]
    permissions: List[PermissionOut]
    created_at: datetime
    updated_at: Optional[datetime]
