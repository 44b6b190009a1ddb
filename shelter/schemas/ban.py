"""Pydantic v2 request/response schemas for ban endpoints."""

import uuid
from datetime import date

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from shelter.schemas.common import AuditResponse, reject_null

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class BanCreate(BaseModel):
    """Schema for creating a new ban."""

    guest_id: uuid.UUID
    active: bool = True
    ban_from: date
    ban_to: date
    comments: str | None = None
    staff: str | None = Field(None, max_length=255)

    @model_validator(mode="after")
    def check_dates(self) -> "BanCreate":
        """Validate that ban_to is not before ban_from."""
        if self.ban_to < self.ban_from:
            raise ValueError("ban_to must not be before ban_from")
        return self


class BanUpdate(BaseModel):
    """Schema for partially updating a ban. All fields optional."""

    active: bool | None = None
    ban_from: date | None = None
    ban_to: date | None = None
    comments: str | None = None
    staff: str | None = Field(None, max_length=255)
    version: int | None = Field(None, ge=0)

    @field_validator("active", "ban_from", "ban_to")
    @classmethod
    def required_not_null(cls, value, info: ValidationInfo):
        return reject_null(value, info.field_name)

    @model_validator(mode="after")
    def check_dates(self) -> "BanUpdate":
        """If both dates are provided, validate ban_to >= ban_from."""
        if self.ban_from is not None and self.ban_to is not None and self.ban_to < self.ban_from:
            raise ValueError("ban_to must not be before ban_from")
        return self


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BanResponse(AuditResponse):
    """Ban information returned by the API."""

    guest_id: uuid.UUID
    active: bool
    ban_from: date
    ban_to: date
    comments: str | None = None
    staff: str | None = None
