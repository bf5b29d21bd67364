"""Customers and projects API routers."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Query, status
from sqlalchemy import func, select

from dcinventory.api.dependencies import DbDep
from dcinventory.core.errors import NotFoundError
from dcinventory.models.asset import Asset
from dcinventory.models.customer import Customer, Project
from dcinventory.schemas.asset import AssetList
from dcinventory.schemas.customer import (
    CustomerCreate,
    CustomerList,
    CustomerOut,
    CustomerUpdate,
    ProjectCreate,
    ProjectList,
    ProjectOut,
    ProjectUpdate,
)

router = APIRouter(prefix="/customers", tags=["customers"])
projects_router = APIRouter(prefix="/projects", tags=["projects"])


async def _get_customer(db: DbDep, customer_id: uuid.UUID) -> Customer:
    customer = await db.get(Customer, customer_id)
    if customer is None:
        raise NotFoundError("Customer not found", customer_id=customer_id)
    return customer


async def _get_project(db: DbDep, project_id: uuid.UUID) -> Project:
    project = await db.get(Project, project_id)
    if project is None:
        raise NotFoundError("Project not found", project_id=project_id)
    return project


# ── Customers ────────────────────────────────────────────────────────────────

@router.get("", response_model=CustomerList)
async def list_customers(
    db: DbDep,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=500),
) -> CustomerList:
    total = (await db.execute(select(func.count()).select_from(Customer))).scalar_one()
    result = await db.execute(select(Customer).order_by(Customer.name).offset(skip).limit(limit))
    return CustomerList(total=total, items=list(result.scalars().all()))


@router.post("", response_model=CustomerOut, status_code=status.HTTP_201_CREATED)
async def create_customer(payload: CustomerCreate, db: DbDep) -> Customer:
    customer = Customer(**payload.model_dump())
    db.add(customer)
    await db.flush()
    await db.refresh(customer)
    return customer


@router.get("/{customer_id}", response_model=CustomerOut)
async def get_customer(customer_id: uuid.UUID, db: DbDep) -> Customer:
    return await _get_customer(db, customer_id)


@router.get("/{customer_id}/assets", response_model=AssetList)
async def list_customer_assets(customer_id: uuid.UUID, db: DbDep) -> AssetList:
    await _get_customer(db, customer_id)
    result = await db.execute(
        select(Asset).where(Asset.customer_id == customer_id).order_by(Asset.name)
    )
    assets = list(result.scalars().all())
    return AssetList(total=len(assets), items=assets)


@router.patch("/{customer_id}", response_model=CustomerOut)
async def update_customer(
    customer_id: uuid.UUID, payload: CustomerUpdate, db: DbDep
) -> Customer:
    customer = await _get_customer(db, customer_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if field == "name" and value is None:
            continue
        setattr(customer, field, value)
    await db.flush()
    await db.refresh(customer)
    return customer


@router.delete("/{customer_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_customer(customer_id: uuid.UUID, db: DbDep) -> None:
    customer = await _get_customer(db, customer_id)
    await db.delete(customer)


# ── Projects ─────────────────────────────────────────────────────────────────

@projects_router.get("", response_model=ProjectList)
async def list_projects(
    db: DbDep,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=500),
    customer_id: uuid.UUID | None = Query(None),
    status_filter: str | None = Query(None, alias="status"),
) -> ProjectList:
    where = []
    if customer_id:
        where.append(Project.customer_id == customer_id)
    if status_filter:
        where.append(Project.status == status_filter)
    total = (
        await db.execute(select(func.count()).select_from(Project).where(*where))
    ).scalar_one()
    result = await db.execute(
        select(Project).where(*where).order_by(Project.name).offset(skip).limit(limit)
    )
    return ProjectList(total=total, items=list(result.scalars().all()))


@projects_router.post("", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
async def create_project(payload: ProjectCreate, db: DbDep) -> Project:
    if payload.customer_id:
        await _get_customer(db, payload.customer_id)
    project = Project(**payload.model_dump())
    db.add(project)
    await db.flush()
    await db.refresh(project)
    return project


@projects_router.get("/{project_id}", response_model=ProjectOut)
async def get_project(project_id: uuid.UUID, db: DbDep) -> Project:
    return await _get_project(db, project_id)


@projects_router.patch("/{project_id}", response_model=ProjectOut)
async def update_project(project_id: uuid.UUID, payload: ProjectUpdate, db: DbDep) -> Project:
    project = await _get_project(db, project_id)
    data = payload.model_dump(exclude_unset=True)
    if data.get("customer_id"):
        await _get_customer(db, data["customer_id"])
    for field, value in data.items():
        if field in ("name", "status") and value is None:
            continue
        setattr(project, field, value)
    await db.flush()
    await db.refresh(project)
    return project


@projects_router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(project_id: uuid.UUID, db: DbDep) -> None:
    project = await _get_project(db, project_id)
    await db.delete(project)
