"""IP addresses API router — the allocation ledger transitions."""

from __future__ import annotations

import uuid

from fastapi import APIRouter

from dcinventory.api.dependencies import DbDep, IpamDep
from dcinventory.models.ip_pool import IpAddress
from dcinventory.schemas.ip_pool import (
    AddressOut,
    AssignRequest,
    BulkStatusRequest,
    BulkStatusResult,
    ReserveRequest,
)

router = APIRouter(prefix="/ip-addresses", tags=["ip-addresses"])


# NOTE: /bulk-status must be defined before /{address_id} routes
@router.post("/bulk-status", response_model=BulkStatusResult)
async def bulk_update_status(
    payload: BulkStatusRequest, db: DbDep, ipam: IpamDep
) -> BulkStatusResult:
    updated = await ipam.bulk_update_status(
        db, payload.address_ids, payload.status, payload.reason
    )
    return BulkStatusResult(updated=updated)


@router.get("/{address_id}", response_model=AddressOut)
async def get_address(address_id: uuid.UUID, db: DbDep, ipam: IpamDep) -> IpAddress:
    return await ipam.get_address(db, address_id)


@router.post("/{address_id}/assign", response_model=AddressOut)
async def assign_address(
    address_id: uuid.UUID, payload: AssignRequest, db: DbDep, ipam: IpamDep
) -> IpAddress:
    return await ipam.assign_address(db, address_id, payload.asset_id, payload.hostname)


@router.post("/{address_id}/release", response_model=AddressOut)
async def release_address(address_id: uuid.UUID, db: DbDep, ipam: IpamDep) -> IpAddress:
    return await ipam.release_address(db, address_id)


@router.post("/{address_id}/reserve", response_model=AddressOut)
async def reserve_address(
    address_id: uuid.UUID, payload: ReserveRequest, db: DbDep, ipam: IpamDep
) -> IpAddress:
    return await ipam.reserve_address(db, address_id, payload.reason)
