"""FastAPI dependency providers."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from dcinventory.core.config import get_settings
from dcinventory.core.database import get_session_factory
from dcinventory.services.audit import ChangeLogSink
from dcinventory.services.ipam import IpamService
from dcinventory.services.racks import RackService


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session for the duration of a request."""
    factory = get_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_change_log_sink() -> ChangeLogSink:
    """Audit sink with its own sessions, independent of the request session."""
    return ChangeLogSink(get_session_factory())


def get_ipam_service(
    changes: Annotated[ChangeLogSink, Depends(get_change_log_sink)],
) -> IpamService:
    return IpamService(changes, batch_size=get_settings().address_batch_size)


def get_rack_service(
    changes: Annotated[ChangeLogSink, Depends(get_change_log_sink)],
) -> RackService:
    return RackService(changes)


DbDep = Annotated[AsyncSession, Depends(get_db)]
IpamDep = Annotated[IpamService, Depends(get_ipam_service)]
RackServiceDep = Annotated[RackService, Depends(get_rack_service)]
