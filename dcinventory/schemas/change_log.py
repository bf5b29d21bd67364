"""Schemas for the audit trail and dashboard summary."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class ChangeLogOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    table_name: str
    record_id: uuid.UUID
    action: str
    changes: dict[str, Any] | None
    description: str | None
    created_at: datetime


class ChangeLogList(BaseModel):
    total: int
    items: list[ChangeLogOut]


class DashboardSummary(BaseModel):
    assets_total: int
    assets_active: int
    addresses_total: int
    addresses_assigned: int
    racks_total: int
    customers_total: int
    pools_total: int
