"""Schemas for data centers, racks and rack placement."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

RackStatus = Literal["available", "occupied", "maintenance", "reserved"]


class DataCenterBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    location: str = Field(..., min_length=1, max_length=255)
    address: str | None = None
    power_capacity_kw: float | None = Field(default=None, ge=0)
    cooling_capacity_tons: float | None = Field(default=None, ge=0)


class DataCenterCreate(DataCenterBase):
    pass


class DataCenterUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    location: str | None = Field(default=None, min_length=1, max_length=255)
    address: str | None = None
    power_capacity_kw: float | None = Field(default=None, ge=0)
    cooling_capacity_tons: float | None = Field(default=None, ge=0)


class DataCenterOut(DataCenterBase):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class DataCenterList(BaseModel):
    total: int
    items: list[DataCenterOut]


class RackCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    data_center_id: uuid.UUID
    row_position: str = Field(..., min_length=1, max_length=20)
    column_position: str = Field(..., min_length=1, max_length=20)
    height_units: int | None = Field(default=None, ge=1, le=60)
    power_capacity_watts: int | None = Field(default=None, ge=0)
    weight_capacity_kg: int | None = Field(default=None, ge=0)
    status: RackStatus = "available"
    notes: str | None = None


class RackUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    row_position: str | None = Field(default=None, min_length=1, max_length=20)
    column_position: str | None = Field(default=None, min_length=1, max_length=20)
    height_units: int | None = Field(default=None, ge=1, le=60)
    power_capacity_watts: int | None = Field(default=None, ge=0)
    weight_capacity_kg: int | None = Field(default=None, ge=0)
    status: RackStatus | None = None
    notes: str | None = None


class RackOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    data_center_id: uuid.UUID
    row_position: str
    column_position: str
    height_units: int
    power_capacity_watts: int | None
    weight_capacity_kg: int | None
    status: str
    notes: str | None
    created_at: datetime
    updated_at: datetime


class RackList(BaseModel):
    total: int
    items: list[RackOut]


class RackSpanOut(BaseModel):
    asset_id: uuid.UUID
    asset_name: str | None
    start_unit: int
    end_unit: int
    height_units: int


class RackLayoutOut(BaseModel):
    rack_id: uuid.UUID
    height_units: int
    used_units: int
    spans: list[RackSpanOut]
    free_units: list[int]


class PlacementRequest(BaseModel):
    rack_id: uuid.UUID
    # No lower bound here: out-of-range positions are a fit error, not a schema error
    start_unit: int
