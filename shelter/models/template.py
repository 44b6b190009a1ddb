"""Template model: a reusable mat layout for one facility."""

import uuid

from sqlalchemy import JSON, ForeignKey, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from shelter.database import AuditMixin, Base, UUIDPrimaryKeyMixin


class Template(UUIDPrimaryKeyMixin, AuditMixin, Base):
    """Mat range plus a sparse mat -> features map used to generate a day."""

    __tablename__ = "templates"

    facility_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("facilities.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    all_mats: Mapped[str] = mapped_column(String(255), nullable=False)  # e.g. "1-24" or "1-10,12"
    # JSON object keys are strings: {"1": ["H"], "3": ["H", "S"]}
    features: Mapped[dict[str, list[str]] | None] = mapped_column(JSON(none_as_null=True), default=None)
    comments: Mapped[str | None] = mapped_column(Text, default=None)

    __table_args__ = (UniqueConstraint("facility_id", "name", name="uq_templates_facility_name"),)

    def features_for(self, mat_number: int) -> list[str] | None:
        """Feature codes the template assigns to ``mat_number``, or None."""
        if not self.features:
            return None
        codes = self.features.get(str(mat_number))
        return list(codes) if codes is not None else None

    def __repr__(self) -> str:
        return f"<Template(id={self.id}, name={self.name!r}, all_mats={self.all_mats!r})>"
