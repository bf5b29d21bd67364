"""Schemas for customers and projects."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field

ProjectStatus = Literal["planning", "active", "completed", "cancelled"]


class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    contact_name: str | None = None
    contact_email: EmailStr | None = None
    contact_phone: str | None = Field(default=None, max_length=50)
    notes: str | None = None


class CustomerUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    contact_name: str | None = None
    contact_email: EmailStr | None = None
    contact_phone: str | None = Field(default=None, max_length=50)
    notes: str | None = None


class CustomerOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    contact_name: str | None
    contact_email: str | None
    contact_phone: str | None
    notes: str | None
    created_at: datetime
    updated_at: datetime


class CustomerList(BaseModel):
    total: int
    items: list[CustomerOut]


class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    customer_id: uuid.UUID | None = None
    description: str | None = None
    status: ProjectStatus = "planning"


class ProjectUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    customer_id: uuid.UUID | None = None
    description: str | None = None
    status: ProjectStatus | None = None


class ProjectOut(ProjectCreate):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class ProjectList(BaseModel):
    total: int
    items: list[ProjectOut]
