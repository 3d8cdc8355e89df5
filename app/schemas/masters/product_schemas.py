# app/schemas/masters/product_schemas.py

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.utils.response import ListData


class ProductCreate(BaseModel):
    sku: str = Field(min_length=1, max_length=255)
    code: str = Field(min_length=1, max_length=255)
    barcode: Optional[str] = Field(default=None, max_length=255)
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    # centimetres
    width: Optional[int] = Field(default=None, ge=0)
    height: Optional[int] = Field(default=None, ge=0)
    depth: Optional[int] = Field(default=None, ge=0)


class ProductUpdate(BaseModel):
    sku: Optional[str] = Field(default=None, min_length=1, max_length=255)
    code: Optional[str] = Field(default=None, min_length=1, max_length=255)
    barcode: Optional[str] = Field(default=None, max_length=255)
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    width: Optional[int] = Field(default=None, ge=0)
    height: Optional[int] = Field(default=None, ge=0)
    depth: Optional[int] = Field(default=None, ge=0)


class ProductOut(BaseModel):
    id: int
    sku: str
    code: str
    barcode: Optional[str]
    name: str
    description: Optional[str]
    width: Optional[int]
    height: Optional[int]
    depth: Optional[int]
    client_id: int

    created_by: Optional[int]
    updated_by: Optional[int]

    created_at: datetime
    updated_at: Optional[datetime]


class ProductListData(ListData[ProductOut]):
    pass
