"""Pydantic v2 request/response schemas for registration endpoints."""

import uuid
from datetime import date, time
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_serializer, field_validator

from shelter.models.types import FeatureType, PaymentType
from shelter.schemas.common import AuditResponse, reject_null

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class RegistrationCreate(BaseModel):
    """Schema for creating an unassigned registration (one mat, one day)."""

    facility_id: uuid.UUID
    registration_date: date
    mat_number: int = Field(..., ge=1)
    features: list[FeatureType] | None = None

    model_config = ConfigDict(use_enum_values=True)


class RegistrationUpdate(BaseModel):
    """Schema for partially updating a registration. All fields optional.

    Guest assignment changes go through the assign/deassign endpoints.
    """

    registration_date: date | None = None
    mat_number: int | None = Field(None, ge=1)
    features: list[FeatureType] | None = None
    payment_type: PaymentType | None = None
    payment_amount: Decimal | None = Field(None, ge=0)
    shower_time: time | None = None
    wakeup_time: time | None = None
    comments: str | None = None
    version: int | None = Field(None, ge=0)

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("registration_date", "mat_number")
    @classmethod
    def required_not_null(cls, value, info: ValidationInfo):
        return reject_null(value, info.field_name)


class Assign(BaseModel):
    """Assignment of a guest to an unassigned registration."""

    guest_id: uuid.UUID
    payment_type: PaymentType
    payment_amount: Decimal | None = Field(None, ge=0)
    shower_time: time | None = None
    wakeup_time: time | None = None
    comments: str | None = None

    model_config = ConfigDict(use_enum_values=True)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class RegistrationResponse(AuditResponse):
    """Registration returned from CRUD, import and generate operations."""

    facility_id: uuid.UUID
    registration_date: date
    mat_number: int
    features: list[FeatureType] | None = None
    guest_id: uuid.UUID | None = None
    payment_type: PaymentType | None = None
    payment_amount: Decimal | None = None
    shower_time: time | None = None
    wakeup_time: time | None = None
    comments: str | None = None

    @field_serializer("shower_time", "wakeup_time")
    def serialize_hhmm(self, value: time | None) -> str | None:
        """Times travel as ``HH:MM``."""
        return value.strftime("%H:%M") if value is not None else None
