from pydantic import BaseModel
from typing import Optional

from app.utils.response import ListData


class PermissionOut(BaseModel):
    id: int
    name: str
    resource: str
    description: Optional[str]

    class Config:
        from_attributes = True


class PermissionSyncResult(BaseModel):
    created: int
    updated: int
    deleted: int
    total: int


class PermissionListData(ListData[PermissionOut]):
    pass
