from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from app.utils.response import ListData


# =========================
# CREATE / UPDATE
# =========================
class UserCreateSchema(BaseModel):
    username: str = Field(min_length=3, max_length=150)
    password: str = Field(min_length=5)
    role_id: Optional[int] = None
    client_ids: List[int] = Field(default_factory=list)
    is_active: bool = True


class UserUpdateSchema(BaseModel):
    username: Optional[str] = Field(default=None, min_length=3, max_length=150)
    password: Optional[str] = Field(default=None, min_length=5)
    role_id: Optional[int] = None
    client_ids: Optional[List[int]] = None
    is_active: Optional[bool] = None


# =========================
# LIST FILTERS
# =========================
class UserListFilters(BaseModel):
    search: Optional[str] = None
    role_id: Optional[int] = None
    is_active: Optional[bool] = None
    sort_by: str = "created_at"
    sort_order: str = "desc"
    page: int = Field(1, ge=1)
    page_size: int = Field(20, ge=1, le=100)


# =========================
# RESPONSE SCHEMAS
# =========================
class UserOut(BaseModel):
    id: int
    username: str
    role_id: Optional[int]
    role_name: Optional[str]
    client_ids: List[int]
    is_active: bool
    last_login: Optional[datetime]
    created_at: datetime
    updated_at: Optional[datetime]


class UserListData(ListData[UserOut]):
    page: int
    page_size: int
