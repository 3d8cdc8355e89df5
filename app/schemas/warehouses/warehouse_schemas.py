from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.models.enums.dimension_type import DimensionType
from app.utils.response import ListData

# labels per dimension
MAX_DIMENSION_COUNT = 10000


class WarehouseCreate(BaseModel):
    name: str = Field(min_length=1, max_length=150)
    location_id: int

    aisle_type: Optional[DimensionType] = None
    aisle_count: Optional[int] = Field(default=None, ge=1, le=MAX_DIMENSION_COUNT)
    bay_type: Optional[DimensionType] = None
    bay_count: Optional[int] = Field(default=None, ge=1, le=MAX_DIMENSION_COUNT)
    level_type: Optional[DimensionType] = None
    level_count: Optional[int] = Field(default=None, ge=1, le=MAX_DIMENSION_COUNT)
    bin_type: Optional[DimensionType] = None
    bin_count: Optional[int] = Field(default=None, ge=1, le=MAX_DIMENSION_COUNT)


class WarehouseUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=150)
    location_id: Optional[int] = None

    aisle_type: Optional[DimensionType] = None
    aisle_count: Optional[int] = Field(default=None, ge=1, le=MAX_DIMENSION_COUNT)
    bay_type: Optional[DimensionType] = None
    bay_count: Optional[int] = Field(default=None, ge=1, le=MAX_DIMENSION_COUNT)
    level_type: Optional[DimensionType] = None
    level_count: Optional[int] = Field(default=None, ge=1, le=MAX_DIMENSION_COUNT)
    bin_type: Optional[DimensionType] = None
    bin_count: Optional[int] = Field(default=None, ge=1, le=MAX_DIMENSION_COUNT)


class WarehouseOut(BaseModel):
    id: int
    name: str
    location_id: int

    aisle_type: Optional[DimensionType]
    aisle_count: Optional[int]
    bay_type: Optional[DimensionType]
    bay_count: Optional[int]
    level_type: Optional[DimensionType]
    level_count: Optional[int]
    bin_type: Optional[DimensionType]
    bin_count: Optional[int]

    created_by: Optional[int]
    updated_by: Optional[int]
    created_at: datetime
    updated_at: Optional[datetime]


class WarehouseListData(ListData[WarehouseOut]):
    pass
