"""Guest domain model."""

import uuid

from sqlalchemy import ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shelter.database import AuditMixin, Base, UUIDPrimaryKeyMixin


class Guest(UUIDPrimaryKeyMixin, AuditMixin, Base):
    """Guest model: people who sleep on mats at a facility."""

    __tablename__ = "guests"

    facility_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("facilities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    comments: Mapped[str | None] = mapped_column(Text, default=None)

    # Relationships
    bans: Mapped[list["Ban"]] = relationship(  # noqa: F821
        back_populates="guest", lazy="selectin", cascade="all, delete-orphan"
    )

    # Full name unique per facility (not globally)
    __table_args__ = (
        UniqueConstraint("facility_id", "first_name", "last_name", name="uq_guests_facility_name"),
    )

    def __repr__(self) -> str:
        return f"<Guest(id={self.id}, name={self.first_name!r} {self.last_name!r})>"
