"""Schemas for Asset resources."""

from __future__ import annotations

import uuid
from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

AssetStatus = Literal["active", "inactive", "maintenance", "retired"]


class AssetBase(BaseModel):
    asset_tag: str | None = Field(default=None, max_length=100)
    serial_number: str | None = None
    manufacturer: str | None = None
    model: str | None = None
    power_consumption_watts: int | None = Field(default=None, ge=0)
    weight_kg: float | None = Field(default=None, ge=0)
    purchase_date: date | None = None
    warranty_expiry: date | None = None
    purchase_cost: float | None = Field(default=None, ge=0)
    customer_id: uuid.UUID | None = None
    project_id: uuid.UUID | None = None
    notes: str | None = None


class AssetCreate(AssetBase):
    name: str = Field(..., min_length=1, max_length=255)
    height_units: int = Field(default=1, ge=1, le=60)
    status: AssetStatus = "active"

    @model_validator(mode="after")
    def _check_warranty(self) -> "AssetCreate":
        if (
            self.purchase_date
            and self.warranty_expiry
            and self.warranty_expiry < self.purchase_date
        ):
            raise ValueError("warranty_expiry cannot be before purchase_date")
        return self


class AssetUpdate(AssetBase):
    # Rack placement is changed only through the placement endpoints
    name: str | None = Field(default=None, min_length=1, max_length=255)
    height_units: int | None = Field(default=None, ge=1, le=60)
    status: AssetStatus | None = None


class AssetOut(AssetBase):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    height_units: int
    status: str
    rack_id: uuid.UUID | None
    rack_position: int | None
    created_at: datetime
    updated_at: datetime


class AssetList(BaseModel):
    total: int
    items: list[AssetOut]
