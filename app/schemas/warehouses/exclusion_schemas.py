# Exclusion payloads keep the camelCase wire shape the console was built against.

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict
from datetime import datetime


class _CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class ExclusionRanges(_CamelModel):
    aisle_from: Optional[str] = Field(default=None, max_length=50)
    aisle_to: Optional[str] = Field(default=None, max_length=50)
    bay_from: Optional[str] = Field(default=None, max_length=50)
    bay_to: Optional[str] = Field(default=None, max_length=50)
    level_from: Optional[str] = Field(default=None, max_length=50)
    level_to: Optional[str] = Field(default=None, max_length=50)
    bin_from: Optional[str] = Field(default=None, max_length=50)
    bin_to: Optional[str] = Field(default=None, max_length=50)

    @field_validator(
        "aisle_from", "aisle_to", "bay_from", "bay_to",
        "level_from", "level_to", "bin_from", "bin_to",
    )
    @classmethod
    def blank_to_none(cls, value):
        # the console sends "" for an untouched select
        if value is None:
            return None
        value = value.strip()
        return value or None


class ExclusionCreate(ExclusionRanges):
    warehouse_id: int


class ExclusionUpdate(ExclusionRanges):
    warehouse_id: int


class ExclusionOut(_CamelModel):
    id: int
    warehouse_id: int

    aisle_from: Optional[str]
    aisle_to: Optional[str]
    bay_from: Optional[str]
    bay_to: Optional[str]
    level_from: Optional[str]
    level_to: Optional[str]
    bin_from: Optional[str]
    bin_to: Optional[str]

    created_at: datetime
    updated_at: Optional[datetime]


class PossibleValuesOut(_CamelModel):
    aisle: List[str]
    bay: List[str]
    level: List[str]
    bin: List[str]


class ExclusionListData(_CamelModel):
    exclusions: List[ExclusionOut]
    possible_values: PossibleValuesOut


class ExclusionCheckData(_CamelModel):
    warehouse_id: int
    coordinate: Dict[str, Optional[str]]
    excluded: bool
    matched_exclusion_ids: List[int]
