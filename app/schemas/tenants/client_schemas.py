from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.utils.response import ListData


class ClientCreate(BaseModel):
    name: str = Field(min_length=1, max_length=150)


class ClientUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=150)


class ClientOut(BaseModel):
    id: int
    name: str
    created_at: datetime
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class ClientListData(ListData[ClientOut]):
    pass
