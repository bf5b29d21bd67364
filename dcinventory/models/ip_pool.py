"""IP pool and address record models."""

import uuid
from datetime import datetime

from sqlalchemy import (
    JSON,
    BigInteger,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dcinventory.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class IpPool(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "ip_pools"
    __table_args__ = (
        CheckConstraint("prefix_length BETWEEN 8 AND 30", name="ck_ip_pools_prefix_length"),
    )

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Network definition (immutable once the address space is seeded)
    network_address: Mapped[str] = mapped_column(String(15), nullable=False)
    prefix_length: Mapped[int] = mapped_column(Integer, nullable=False)

    gateway: Mapped[str | None] = mapped_column(String(15), nullable=True)
    vlan_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    dns_servers: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)

    addresses: Mapped[list["IpAddress"]] = relationship(
        "IpAddress",
        back_populates="pool",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def cidr(self) -> str:
        return f"{self.network_address}/{self.prefix_length}"

    def __repr__(self) -> str:
        return f"<IpPool {self.name!r} {self.cidr}>"


class IpAddress(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "ip_addresses"
    __table_args__ = (
        UniqueConstraint("pool_id", "ip_address", name="uq_ip_addresses_pool_ip"),
    )

    pool_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("ip_pools.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    ip_address: Mapped[str] = mapped_column(String(15), nullable=False, index=True)
    # Unsigned 32-bit value of ip_address, for numeric ordering and range queries
    ip_int: Mapped[int] = mapped_column(BigInteger, nullable=False, index=True)

    # "available" | "assigned" | "reserved" | "blocked"
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="available", index=True
    )

    hostname: Mapped[str | None] = mapped_column(String(255), nullable=True)
    asset_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("assets.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    assignment_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    pool: Mapped[IpPool] = relationship("IpPool", back_populates="addresses")
    asset: Mapped["Asset | None"] = relationship(  # noqa: F821
        "Asset", back_populates="addresses"
    )

    def __repr__(self) -> str:
        return f"<IpAddress {self.ip_address} status={self.status!r}>"
