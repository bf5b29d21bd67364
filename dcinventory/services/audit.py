"""Append-only change log sink.

Entries are written in their own session, after the operation they describe
has committed. A failed write is logged and dropped: the audit trail is
best-effort and never rolls back or fails a ledger transition.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from dcinventory.core.logging import get_logger
from dcinventory.models.change_log import ChangeLog

logger = get_logger(__name__)


@dataclass
class ChangeEntry:
    table_name: str
    record_id: uuid.UUID
    action: str
    description: str
    before: dict[str, Any] | None = None
    after: dict[str, Any] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_model(self) -> ChangeLog:
        changes: dict[str, Any] = {"before": _jsonable(self.before), "after": _jsonable(self.after)}
        changes.update(_jsonable(self.extra) or {})
        return ChangeLog(
            table_name=self.table_name,
            record_id=self.record_id,
            action=self.action,
            changes=changes,
            description=self.description,
        )


def _jsonable(data: dict[str, Any] | None) -> dict[str, Any] | None:
    if data is None:
        return None
    out: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, uuid.UUID):
            out[key] = str(value)
        elif hasattr(value, "isoformat"):
            out[key] = value.isoformat()
        else:
            out[key] = value
    return out


class ChangeLogSink:
    """Writes ChangeEntry rows through a dedicated session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def record(self, *entries: ChangeEntry) -> bool:
        """Persist *entries*. Returns False (and logs) if the write failed."""
        if not entries:
            return True
        try:
            async with self._session_factory() as session:
                session.add_all([e.to_model() for e in entries])
                await session.commit()
        except SQLAlchemyError:
            logger.warning(
                "Change log write failed, entries dropped",
                count=len(entries),
                table=entries[0].table_name,
                record_id=str(entries[0].record_id),
                exc_info=True,
            )
            return False
        return True
