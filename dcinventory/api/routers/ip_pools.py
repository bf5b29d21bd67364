"""IP pools API router — pool CRUD, stats and address listing."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status
from sqlalchemy import func, select

from dcinventory.api.dependencies import DbDep, IpamDep
from dcinventory.models.ip_pool import IpAddress, IpPool
from dcinventory.schemas.ip_pool import (
    AddressList,
    AddressStatus,
    PoolCreate,
    PoolList,
    PoolOut,
    PoolStats,
    PoolUpdate,
)

router = APIRouter(prefix="/ip-pools", tags=["ip-pools"])


@router.get("", response_model=PoolList)
async def list_pools(
    db: DbDep,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=500),
) -> PoolList:
    total = (await db.execute(select(func.count()).select_from(IpPool))).scalar_one()
    result = await db.execute(select(IpPool).order_by(IpPool.name).offset(skip).limit(limit))
    return PoolList(total=total, items=list(result.scalars().all()))


@router.post("", response_model=PoolOut, status_code=status.HTTP_201_CREATED)
async def create_pool(payload: PoolCreate, db: DbDep, ipam: IpamDep) -> IpPool:
    return await ipam.create_pool(db, **payload.model_dump())


@router.get("/{pool_id}", response_model=PoolOut)
async def get_pool(pool_id: uuid.UUID, db: DbDep, ipam: IpamDep) -> IpPool:
    return await ipam.get_pool(db, pool_id)


@router.patch("/{pool_id}", response_model=PoolOut)
async def update_pool(
    pool_id: uuid.UUID, payload: PoolUpdate, db: DbDep, ipam: IpamDep
) -> IpPool:
    return await ipam.update_pool(db, pool_id, payload.model_dump(exclude_unset=True))


@router.delete("/{pool_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_pool(pool_id: uuid.UUID, db: DbDep, ipam: IpamDep) -> None:
    await ipam.delete_pool(db, pool_id)


@router.get("/{pool_id}/stats", response_model=PoolStats)
async def pool_stats(pool_id: uuid.UUID, db: DbDep, ipam: IpamDep) -> PoolStats:
    return PoolStats(**await ipam.pool_stats(db, pool_id))


@router.get("/{pool_id}/addresses", response_model=AddressList)
async def list_pool_addresses(
    pool_id: uuid.UUID,
    db: DbDep,
    ipam: IpamDep,
    skip: int = Query(0, ge=0),
    limit: int = Query(256, ge=1, le=4096),
    status_filter: AddressStatus | None = Query(None, alias="status"),
) -> AddressList:
    await ipam.get_pool(db, pool_id)

    where = [IpAddress.pool_id == pool_id]
    if status_filter:
        where.append(IpAddress.status == status_filter)

    total = (
        await db.execute(select(func.count()).select_from(IpAddress).where(*where))
    ).scalar_one()
    result = await db.execute(
        select(IpAddress)
        .where(*where)
        .order_by(IpAddress.ip_int)
        .offset(skip)
        .limit(limit)
    )
    return AddressList(total=total, items=list(result.scalars().all()))
