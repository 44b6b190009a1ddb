"""Pydantic v2 request/response schemas for facility endpoints."""

from pydantic import BaseModel, EmailStr, Field, ValidationInfo, field_validator

from shelter.schemas.common import AuditResponse, reject_null

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class FacilityCreate(BaseModel):
    """Schema for creating a new facility."""

    name: str = Field(..., min_length=1, max_length=255)
    address1: str | None = Field(None, max_length=255)
    address2: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=50)
    zip_code: str | None = Field(None, max_length=20)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)


class FacilityUpdate(BaseModel):
    """Schema for partially updating a facility. All fields optional.

    ``version``, when given, must equal the stored version.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    address1: str | None = Field(None, max_length=255)
    address2: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    state: str | None = Field(None, max_length=50)
    zip_code: str | None = Field(None, max_length=20)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    version: int | None = Field(None, ge=0)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value, info: ValidationInfo):
        return reject_null(value, info.field_name)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class FacilityResponse(AuditResponse):
    """Public facility information returned by the API."""

    name: str
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    email: str | None = None
    phone: str | None = None
