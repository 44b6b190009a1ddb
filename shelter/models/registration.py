"""Registration model: one mat at a facility on one date."""

import uuid
from datetime import date, time
from decimal import Decimal

from sqlalchemy import JSON, Date, ForeignKey, Integer, Numeric, String, Text, Time, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from shelter.database import AuditMixin, Base, UUIDPrimaryKeyMixin

# Fields that are only set while a guest is assigned to the mat.
ASSIGNMENT_FIELDS = (
    "guest_id",
    "payment_type",
    "payment_amount",
    "shower_time",
    "wakeup_time",
    "comments",
)


class Registration(UUIDPrimaryKeyMixin, AuditMixin, Base):
    """A mat slot, optionally assigned to a guest."""

    __tablename__ = "registrations"

    facility_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("facilities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    registration_date: Mapped[date] = mapped_column(Date, nullable=False)
    mat_number: Mapped[int] = mapped_column(Integer, nullable=False)
    # None and [] are distinct: absent vs. explicitly no features.
    features: Mapped[list[str] | None] = mapped_column(JSON(none_as_null=True), default=None)

    guest_id: Mapped[uuid.UUID | None] = mapped_column(
        ForeignKey("guests.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    payment_type: Mapped[str | None] = mapped_column(String(2), default=None)
    payment_amount: Mapped[Decimal | None] = mapped_column(Numeric(7, 2), default=None)
    shower_time: Mapped[time | None] = mapped_column(Time, default=None)
    wakeup_time: Mapped[time | None] = mapped_column(Time, default=None)
    comments: Mapped[str | None] = mapped_column(Text, default=None)

    __table_args__ = (
        UniqueConstraint(
            "facility_id",
            "registration_date",
            "mat_number",
            name="uq_registrations_facility_date_mat",
        ),
    )

    @property
    def assigned(self) -> bool:
        return self.guest_id is not None

    def clear_assignment(self) -> None:
        """Reset every assignment field; features belong to the mat and stay."""
        for field in ASSIGNMENT_FIELDS:
            setattr(self, field, None)

    def __repr__(self) -> str:
        return (
            f"<Registration(id={self.id}, facility_id={self.facility_id}, "
            f"date={self.registration_date}, mat={self.mat_number}, guest_id={self.guest_id})>"
        )
