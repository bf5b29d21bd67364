"""Schemas for IP pools and address records."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

AddressStatus = Literal["available", "assigned", "reserved", "blocked"]


def _split_dns(v: object) -> object:
    # Accept "8.8.8.8, 1.1.1.1" as well as a JSON list
    if isinstance(v, str):
        return [s.strip() for s in v.split(",") if s.strip()]
    return v


class PoolCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    network_address: str = Field(..., min_length=7, max_length=15)
    prefix_length: int
    gateway: str | None = None
    vlan_id: int | None = Field(default=None, ge=1, le=4094)
    dns_servers: list[str] | None = None
    description: str | None = None

    @field_validator("dns_servers", mode="before")
    @classmethod
    def _normalize_dns(cls, v: object) -> object:
        return _split_dns(v)

    @field_validator("gateway", mode="before")
    @classmethod
    def _blank_gateway(cls, v: str | None) -> str | None:
        if isinstance(v, str) and not v.strip():
            return None
        return v


class PoolUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    description: str | None = None
    gateway: str | None = None
    vlan_id: int | None = Field(default=None, ge=1, le=4094)
    dns_servers: list[str] | None = None

    @field_validator("dns_servers", mode="before")
    @classmethod
    def _normalize_dns(cls, v: object) -> object:
        return _split_dns(v)


class PoolOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str
    description: str | None
    network_address: str
    prefix_length: int
    cidr: str
    gateway: str | None
    vlan_id: int | None
    dns_servers: list[str] | None
    created_at: datetime
    updated_at: datetime


class PoolList(BaseModel):
    total: int
    items: list[PoolOut]


class PoolStats(BaseModel):
    pool_id: uuid.UUID
    name: str
    cidr: str
    total: int
    available: int
    assigned: int
    reserved: int
    blocked: int
    utilization: float


class AddressOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    pool_id: uuid.UUID
    ip_address: str
    status: AddressStatus
    hostname: str | None
    asset_id: uuid.UUID | None
    assignment_date: datetime | None
    notes: str | None
    updated_at: datetime


class AddressList(BaseModel):
    total: int
    items: list[AddressOut]


class AssignRequest(BaseModel):
    asset_id: uuid.UUID | None = None
    hostname: str | None = Field(default=None, max_length=255)


class ReserveRequest(BaseModel):
    # Blank reasons are rejected by the ledger, not here
    reason: str = ""


class BulkStatusRequest(BaseModel):
    address_ids: list[uuid.UUID] = Field(..., min_length=1)
    status: Literal["available", "reserved", "blocked"]
    reason: str | None = None


class BulkStatusResult(BaseModel):
    updated: int
