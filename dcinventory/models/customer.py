"""Customer and Project models."""

import uuid

from sqlalchemy import ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dcinventory.models.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

PROJECT_STATUSES = ("planning", "active", "completed", "cancelled")


class Customer(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "customers"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    contact_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    projects: Mapped[list["Project"]] = relationship(
        "Project", back_populates="customer"
    )

    def __repr__(self) -> str:
        return f"<Customer {self.name!r}>"


class Project(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    __tablename__ = "projects"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    customer_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("customers.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    # "planning" | "active" | "completed" | "cancelled"
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="planning")

    customer: Mapped[Customer | None] = relationship("Customer", back_populates="projects")

    def __repr__(self) -> str:
        return f"<Project {self.name!r} status={self.status!r}>"
