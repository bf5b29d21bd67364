"""Change log and dashboard routers (read-only)."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Query
from sqlalchemy import func, select

from dcinventory.api.dependencies import DbDep
from dcinventory.models.asset import Asset
from dcinventory.models.change_log import ChangeLog
from dcinventory.models.customer import Customer
from dcinventory.models.ip_pool import IpAddress, IpPool
from dcinventory.models.rack import Rack
from dcinventory.schemas.change_log import ChangeLogList, DashboardSummary

router = APIRouter(prefix="/change-logs", tags=["change-logs"])
dashboard_router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=ChangeLogList)
async def list_change_logs(
    db: DbDep,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=500),
    table_name: str | None = Query(None),
    record_id: uuid.UUID | None = Query(None),
) -> ChangeLogList:
    where = []
    if table_name:
        where.append(ChangeLog.table_name == table_name)
    if record_id:
        where.append(ChangeLog.record_id == record_id)

    total = (
        await db.execute(select(func.count()).select_from(ChangeLog).where(*where))
    ).scalar_one()
    result = await db.execute(
        select(ChangeLog)
        .where(*where)
        .order_by(ChangeLog.created_at.desc())
        .offset(skip)
        .limit(limit)
    )
    return ChangeLogList(total=total, items=list(result.scalars().all()))


async def _count(db: DbDep, model, *where) -> int:
    return (await db.execute(select(func.count()).select_from(model).where(*where))).scalar_one()


@dashboard_router.get("/summary", response_model=DashboardSummary)
async def dashboard_summary(db: DbDep) -> DashboardSummary:
    return DashboardSummary(
        assets_total=await _count(db, Asset),
        assets_active=await _count(db, Asset, Asset.status == "active"),
        addresses_total=await _count(db, IpAddress),
        addresses_assigned=await _count(db, IpAddress, IpAddress.status == "assigned"),
        racks_total=await _count(db, Rack),
        customers_total=await _count(db, Customer),
        pools_total=await _count(db, IpPool),
    )
