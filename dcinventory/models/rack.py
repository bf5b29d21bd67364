"""Rack model — a fixed-height column of rack units inside a data center."""

import uuid

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dcinventory.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

RACK_STATUSES = ("available", "occupied", "maintenance", "reserved")


class Rack(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "racks"
    __table_args__ = (
        UniqueConstraint(
            "data_center_id", "row_position", "column_position", name="uq_rack_grid_position"
        ),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    data_center_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("data_centers.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    # Floor grid coordinates, e.g. row "A", column "07"
    row_position: Mapped[str] = mapped_column(String(20), nullable=False)
    column_position: Mapped[str] = mapped_column(String(20), nullable=False)

    height_units: Mapped[int] = mapped_column(Integer, nullable=False, default=42)
    power_capacity_watts: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight_capacity_kg: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # "available" | "occupied" | "maintenance" | "reserved"
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="available")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    data_center: Mapped["DataCenter"] = relationship(  # noqa: F821
        "DataCenter", back_populates="racks"
    )
    assets: Mapped[list["Asset"]] = relationship(  # noqa: F821
        "Asset", back_populates="rack"
    )

    def __repr__(self) -> str:
        return f"<Rack {self.name!r} {self.row_position}/{self.column_position} {self.height_units}U>"
