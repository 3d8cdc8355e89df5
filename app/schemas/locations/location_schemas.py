from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.utils.response import ListData


class LocationCreate(BaseModel):
    name: str = Field(min_length=1, max_length=150)


class LocationUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=150)


class LocationOut(BaseModel):
    id: int
    name: str
    client_id: int
    created_by: Optional[int]
    updated_by: Optional[int]
    created_at: datetime
    updated_at: Optional[datetime]


class LocationListData(ListData[LocationOut]):
    pass
