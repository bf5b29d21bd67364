"""Asset model — a physical device tracked in the inventory."""

import uuid
from datetime import date

from sqlalchemy import CheckConstraint, Date, ForeignKey, Integer, Numeric, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dcinventory.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

ASSET_STATUSES = ("active", "inactive", "maintenance", "retired")


class Asset(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "assets"
    __table_args__ = (
        CheckConstraint(
            "(rack_id IS NULL) = (rack_position IS NULL)",
            name="ck_assets_rack_placement",
        ),
        CheckConstraint("height_units >= 1", name="ck_assets_height_positive"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    asset_tag: Mapped[str | None] = mapped_column(String(100), unique=True, nullable=True)
    serial_number: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Hardware
    manufacturer: Mapped[str | None] = mapped_column(String(255), nullable=True)
    model: Mapped[str | None] = mapped_column(String(255), nullable=True)
    height_units: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    power_consumption_watts: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weight_kg: Mapped[float | None] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=True)

    # Procurement
    purchase_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    warranty_expiry: Mapped[date | None] = mapped_column(Date, nullable=True)
    purchase_cost: Mapped[float | None] = mapped_column(
        Numeric(12, 2, asdecimal=False), nullable=True
    )

    # "active" | "inactive" | "maintenance" | "retired"
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active", index=True)

    # Ownership
    customer_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("customers.id", ondelete="SET NULL"), nullable=True
    )
    project_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("projects.id", ondelete="SET NULL"), nullable=True
    )

    # Placement: first unit the asset occupies, 1-based from the top of the rack
    rack_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("racks.id", ondelete="RESTRICT"), nullable=True, index=True
    )
    rack_position: Mapped[int | None] = mapped_column(Integer, nullable=True)

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    rack: Mapped["Rack | None"] = relationship(  # noqa: F821
        "Rack", back_populates="assets"
    )
    addresses: Mapped[list["IpAddress"]] = relationship(  # noqa: F821
        "IpAddress", back_populates="asset"
    )

    def __repr__(self) -> str:
        return f"<Asset {self.name!r} rack={self.rack_id} pos={self.rack_position}>"
