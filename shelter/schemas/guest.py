"""Pydantic v2 request/response schemas for guest endpoints."""

import uuid

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from shelter.schemas.common import AuditResponse, reject_null

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class GuestCreate(BaseModel):
    """Schema for creating a new guest."""

    facility_id: uuid.UUID
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    comments: str | None = None


class GuestUpdate(BaseModel):
    """Schema for partially updating a guest. All fields optional."""

    facility_id: uuid.UUID | None = None
    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    comments: str | None = None
    version: int | None = Field(None, ge=0)

    @field_validator("facility_id", "first_name", "last_name")
    @classmethod
    def required_not_null(cls, value, info: ValidationInfo):
        return reject_null(value, info.field_name)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class GuestResponse(AuditResponse):
    """Public guest information returned by the API."""

    facility_id: uuid.UUID
    first_name: str
    last_name: str
    comments: str | None = None
