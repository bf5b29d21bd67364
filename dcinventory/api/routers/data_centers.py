"""Data centers API router."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status
from sqlalchemy import func, select

from dcinventory.api.dependencies import DbDep
from dcinventory.core.errors import ConflictError, NotFoundError
from dcinventory.models.data_center import DataCenter
from dcinventory.models.rack import Rack
from dcinventory.schemas.rack import (
    DataCenterCreate,
    DataCenterList,
    DataCenterOut,
    DataCenterUpdate,
    RackList,
)

router = APIRouter(prefix="/data-centers", tags=["data-centers"])


async def _get_or_404(db: DbDep, data_center_id: uuid.UUID) -> DataCenter:
    dc = await db.get(DataCenter, data_center_id)
    if dc is None:
        raise NotFoundError("Data center not found", data_center_id=data_center_id)
    return dc


@router.get("", response_model=DataCenterList)
async def list_data_centers(
    db: DbDep,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=500),
) -> DataCenterList:
    total = (await db.execute(select(func.count()).select_from(DataCenter))).scalar_one()
    result = await db.execute(
        select(DataCenter).order_by(DataCenter.name).offset(skip).limit(limit)
    )
    return DataCenterList(total=total, items=list(result.scalars().all()))


@router.post("", response_model=DataCenterOut, status_code=status.HTTP_201_CREATED)
async def create_data_center(payload: DataCenterCreate, db: DbDep) -> DataCenter:
    dc = DataCenter(**payload.model_dump())
    db.add(dc)
    await db.flush()
    await db.refresh(dc)
    return dc


@router.get("/{data_center_id}", response_model=DataCenterOut)
async def get_data_center(data_center_id: uuid.UUID, db: DbDep) -> DataCenter:
    return await _get_or_404(db, data_center_id)


@router.get("/{data_center_id}/racks", response_model=RackList)
async def list_data_center_racks(data_center_id: uuid.UUID, db: DbDep) -> RackList:
    await _get_or_404(db, data_center_id)
    result = await db.execute(
        select(Rack)
        .where(Rack.data_center_id == data_center_id)
        .order_by(Rack.row_position, Rack.column_position)
    )
    racks = list(result.scalars().all())
    return RackList(total=len(racks), items=racks)


@router.patch("/{data_center_id}", response_model=DataCenterOut)
async def update_data_center(
    data_center_id: uuid.UUID, payload: DataCenterUpdate, db: DbDep
) -> DataCenter:
    dc = await _get_or_404(db, data_center_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is None and field in ("name", "location"):
            continue
        setattr(dc, field, value)
    await db.flush()
    await db.refresh(dc)
    return dc


@router.delete("/{data_center_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_data_center(data_center_id: uuid.UUID, db: DbDep) -> None:
    dc = await _get_or_404(db, data_center_id)
    racks = (
        await db.execute(
            select(func.count()).select_from(Rack).where(Rack.data_center_id == data_center_id)
        )
    ).scalar_one()
    if racks:
        raise ConflictError(
            "Cannot delete a data center that still has racks", racks=racks
        )
    await db.delete(dc)
