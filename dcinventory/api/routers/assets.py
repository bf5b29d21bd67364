"""Assets API router — CRUD and rack placement."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from dcinventory.api.dependencies import DbDep, IpamDep, RackServiceDep
from dcinventory.core.errors import ConflictError, NotFoundError
from dcinventory.models.asset import Asset
from dcinventory.models.customer import Customer, Project
from dcinventory.schemas.asset import AssetCreate, AssetList, AssetOut, AssetUpdate
from dcinventory.schemas.rack import PlacementRequest

router = APIRouter(prefix="/assets", tags=["assets"])


async def _get_or_404(db: DbDep, asset_id: uuid.UUID) -> Asset:
    asset = await db.get(Asset, asset_id)
    if asset is None:
        raise NotFoundError("Asset not found", asset_id=asset_id)
    return asset


async def _check_refs(db: DbDep, data: dict) -> None:
    if data.get("customer_id") and await db.get(Customer, data["customer_id"]) is None:
        raise NotFoundError("Customer not found", customer_id=data["customer_id"])
    if data.get("project_id") and await db.get(Project, data["project_id"]) is None:
        raise NotFoundError("Project not found", project_id=data["project_id"])


async def _check_tag(db: DbDep, tag: str | None, exclude_id: uuid.UUID | None = None) -> None:
    if not tag:
        return
    query = select(Asset.id).where(Asset.asset_tag == tag)
    if exclude_id is not None:
        query = query.where(Asset.id != exclude_id)
    if (await db.execute(query)).scalar_one_or_none() is not None:
        raise ConflictError(f"Asset tag {tag!r} is already in use")


@router.get("", response_model=AssetList)
async def list_assets(
    db: DbDep,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=500),
    status_filter: str | None = Query(None, alias="status"),
    rack_id: uuid.UUID | None = Query(None),
    customer_id: uuid.UUID | None = Query(None),
    q: str | None = Query(None, description="Match name, asset tag or serial number"),
) -> AssetList:
    where = []
    if status_filter:
        where.append(Asset.status == status_filter)
    if rack_id:
        where.append(Asset.rack_id == rack_id)
    if customer_id:
        where.append(Asset.customer_id == customer_id)
    if q:
        pattern = f"%{q}%"
        where.append(
            Asset.name.ilike(pattern)
            | Asset.asset_tag.ilike(pattern)
            | Asset.serial_number.ilike(pattern)
        )

    total = (await db.execute(select(func.count()).select_from(Asset).where(*where))).scalar_one()
    result = await db.execute(
        select(Asset).where(*where).order_by(Asset.created_at.desc()).offset(skip).limit(limit)
    )
    return AssetList(total=total, items=list(result.scalars().all()))


# NOTE: /unracked must be defined before /{asset_id} to avoid UUID parse conflicts
@router.get("/unracked", response_model=AssetList)
async def list_unracked_assets(db: DbDep, racks: RackServiceDep) -> AssetList:
    """Active assets that are not in any rack."""
    assets = await racks.available_assets(db)
    return AssetList(total=len(assets), items=assets)


@router.get("/{asset_id}", response_model=AssetOut)
async def get_asset(asset_id: uuid.UUID, db: DbDep) -> Asset:
    return await _get_or_404(db, asset_id)


@router.post("", response_model=AssetOut, status_code=status.HTTP_201_CREATED)
async def create_asset(payload: AssetCreate, db: DbDep) -> Asset:
    data = payload.model_dump()
    await _check_refs(db, data)
    await _check_tag(db, data.get("asset_tag"))
    asset = Asset(**data)
    db.add(asset)
    try:
        await db.flush()
    except IntegrityError as exc:
        raise ConflictError("Asset violates a uniqueness constraint") from exc
    await db.refresh(asset)
    return asset


@router.patch("/{asset_id}", response_model=AssetOut)
async def update_asset(
    asset_id: uuid.UUID, payload: AssetUpdate, db: DbDep, racks: RackServiceDep
) -> Asset:
    asset = await _get_or_404(db, asset_id)
    data = payload.model_dump(exclude_unset=True)
    for required in ("name", "height_units", "status"):
        if required in data and data[required] is None:
            del data[required]

    await _check_refs(db, data)
    if "asset_tag" in data:
        await _check_tag(db, data["asset_tag"], exclude_id=asset.id)
    if "height_units" in data:
        await racks.check_resize(db, asset, data["height_units"])

    for field, value in data.items():
        setattr(asset, field, value)
    await db.flush()
    await db.refresh(asset)
    return asset


@router.delete("/{asset_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_asset(asset_id: uuid.UUID, db: DbDep, ipam: IpamDep) -> None:
    # Addresses bound to the asset go back to the pool
    await ipam.delete_asset(db, asset_id)


@router.put("/{asset_id}/placement", response_model=AssetOut)
async def place_asset(
    asset_id: uuid.UUID, payload: PlacementRequest, db: DbDep, racks: RackServiceDep
) -> Asset:
    return await racks.place_asset(db, asset_id, payload.rack_id, payload.start_unit)


@router.delete("/{asset_id}/placement", response_model=AssetOut)
async def remove_asset_from_rack(
    asset_id: uuid.UUID, db: DbDep, racks: RackServiceDep
) -> Asset:
    return await racks.remove_asset_from_rack(db, asset_id)
