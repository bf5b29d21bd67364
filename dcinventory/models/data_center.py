"""DataCenter model — a site that holds racks."""

from sqlalchemy import Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dcinventory.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class DataCenter(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "data_centers"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)

    power_capacity_kw: Mapped[float | None] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=True
    )
    cooling_capacity_tons: Mapped[float | None] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=True
    )

    racks: Mapped[list["Rack"]] = relationship(  # noqa: F821
        "Rack", back_populates="data_center"
    )

    def __repr__(self) -> str:
        return f"<DataCenter {self.name!r} location={self.location!r}>"
