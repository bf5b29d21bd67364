"""ChangeLog model — append-only audit trail of ledger transitions."""

import uuid
from typing import Any

from sqlalchemy import JSON, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from dcinventory.models.base import Base, CreatedAtMixin, UUIDPrimaryKeyMixin


class ChangeLog(UUIDPrimaryKeyMixin, CreatedAtMixin, Base):
    __tablename__ = "change_logs"
    __table_args__ = (Index("ix_change_logs_created_at", "created_at"),)

    table_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    record_id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    # "INSERT" | "UPDATE" | "DELETE"
    action: Mapped[str] = mapped_column(String(20), nullable=False)
    # {"before": {...}, "after": {...}}
    changes: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<ChangeLog {self.table_name}:{self.record_id} {self.action}>"
