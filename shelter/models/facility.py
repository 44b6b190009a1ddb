"""Facility model: a shelter site that owns guests, mats and templates."""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from shelter.database import AuditMixin, Base, UUIDPrimaryKeyMixin


class Facility(UUIDPrimaryKeyMixin, AuditMixin, Base):
    """A shelter facility."""

    __tablename__ = "facilities"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address1: Mapped[str | None] = mapped_column(String(255), default=None)
    address2: Mapped[str | None] = mapped_column(String(255), default=None)
    city: Mapped[str | None] = mapped_column(String(100), default=None)
    state: Mapped[str | None] = mapped_column(String(50), default=None)
    zip_code: Mapped[str | None] = mapped_column(String(20), default=None)
    email: Mapped[str | None] = mapped_column(String(255), default=None)
    phone: Mapped[str | None] = mapped_column(String(50), default=None)

    __table_args__ = (UniqueConstraint("name", name="uq_facilities_name"),)

    def __repr__(self) -> str:
        return f"<Facility(id={self.id}, name={self.name!r})>"
