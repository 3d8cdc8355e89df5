from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal
from datetime import datetime

from app.utils.response import ListData


class OrderCreate(BaseModel):
    status: str = Field(default="pending", min_length=1, max_length=50)
    total: Decimal = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)


class OrderUpdate(BaseModel):
    status: Optional[str] = Field(default=None, min_length=1, max_length=50)
    total: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)


class OrderOut(BaseModel):
    id: int
    user_id: Optional[int]
    client_id: int
    status: str
    total: Decimal
    created_at: datetime
    updated_at: Optional[datetime]

    class Config:
        from_attributes = True


class OrderListData(ListData[OrderOut]):
    pass
