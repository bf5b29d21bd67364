"""Racks API router — rack CRUD and unit layout."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status
from sqlalchemy import func, select

from dcinventory.api.dependencies import DbDep, RackServiceDep
from dcinventory.models.rack import Rack
from dcinventory.schemas.rack import RackCreate, RackLayoutOut, RackList, RackOut, RackUpdate

router = APIRouter(prefix="/racks", tags=["racks"])


@router.get("", response_model=RackList)
async def list_racks(
    db: DbDep,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=500),
    data_center_id: uuid.UUID | None = Query(None),
    status_filter: str | None = Query(None, alias="status"),
) -> RackList:
    query = select(Rack)
    count_q = select(func.count()).select_from(Rack)
    if data_center_id:
        query = query.where(Rack.data_center_id == data_center_id)
        count_q = count_q.where(Rack.data_center_id == data_center_id)
    if status_filter:
        query = query.where(Rack.status == status_filter)
        count_q = count_q.where(Rack.status == status_filter)

    total = (await db.execute(count_q)).scalar_one()
    result = await db.execute(query.order_by(Rack.name).offset(skip).limit(limit))
    return RackList(total=total, items=list(result.scalars().all()))


@router.post("", response_model=RackOut, status_code=status.HTTP_201_CREATED)
async def create_rack(payload: RackCreate, db: DbDep, racks: RackServiceDep) -> Rack:
    return await racks.create_rack(db, payload.model_dump())


@router.get("/{rack_id}", response_model=RackOut)
async def get_rack(rack_id: uuid.UUID, db: DbDep, racks: RackServiceDep) -> Rack:
    return await racks.get_rack(db, rack_id)


@router.get("/{rack_id}/layout", response_model=RackLayoutOut)
async def get_rack_layout(rack_id: uuid.UUID, db: DbDep, racks: RackServiceDep) -> RackLayoutOut:
    return RackLayoutOut(**await racks.rack_layout(db, rack_id))


@router.patch("/{rack_id}", response_model=RackOut)
async def update_rack(
    rack_id: uuid.UUID, payload: RackUpdate, db: DbDep, racks: RackServiceDep
) -> Rack:
    return await racks.update_rack(db, rack_id, payload.model_dump(exclude_unset=True))


@router.delete("/{rack_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_rack(rack_id: uuid.UUID, db: DbDep, racks: RackServiceDep) -> None:
    await racks.delete_rack(db, rack_id)
