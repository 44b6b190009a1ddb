"""Ban model: a date range during which a guest may not register."""

import uuid
from datetime import date

from sqlalchemy import Boolean, Date, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shelter.database import AuditMixin, Base, UUIDPrimaryKeyMixin


class Ban(UUIDPrimaryKeyMixin, AuditMixin, Base):
    """An inclusive [ban_from, ban_to] window barring a guest."""

    __tablename__ = "bans"

    guest_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("guests.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    active: Mapped[bool] = mapped_column(Boolean, default=True)
    ban_from: Mapped[date] = mapped_column(Date, nullable=False)
    ban_to: Mapped[date] = mapped_column(Date, nullable=False)
    comments: Mapped[str | None] = mapped_column(Text, default=None)
    staff: Mapped[str | None] = mapped_column(String(255), default=None)

    # Relationships
    guest: Mapped["Guest"] = relationship(back_populates="bans", lazy="selectin")  # noqa: F821

    def covers(self, when: date) -> bool:
        """Whether this ban is active and its range includes ``when``."""
        return bool(self.active) and self.ban_from <= when <= self.ban_to

    def __repr__(self) -> str:
        return f"<Ban(id={self.id}, guest_id={self.guest_id}, {self.ban_from}..{self.ban_to})>"
