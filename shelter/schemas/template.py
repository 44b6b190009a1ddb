"""Pydantic v2 request/response schemas for template endpoints."""

import uuid

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from shelter.models.types import FeatureType
from shelter.schemas.common import AuditResponse, reject_null
from shelter.services.mats import parse_mats


def _check_feature_keys(all_mats: str, features: dict[int, list] | None) -> None:
    mats = set(parse_mats(all_mats))
    outside = sorted(set(features or {}) - mats)
    if outside:
        raise ValueError(f"Feature mats {outside} are not in all_mats '{all_mats}'")


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class TemplateCreate(BaseModel):
    """Schema for creating a new template."""

    facility_id: uuid.UUID
    name: str = Field(..., min_length=1, max_length=255)
    all_mats: str = Field(..., min_length=1, max_length=255)
    features: dict[int, list[FeatureType]] | None = None
    comments: str | None = None

    model_config = ConfigDict(use_enum_values=True)

    @model_validator(mode="after")
    def check_mats(self) -> "TemplateCreate":
        """all_mats must parse and every feature key must be one of its mats."""
        _check_feature_keys(self.all_mats, self.features)
        return self


class TemplateUpdate(BaseModel):
    """Schema for partially updating a template. All fields optional.

    Feature keys are checked against the stored ``all_mats`` by the router
    when only one of the two is supplied.
    """

    name: str | None = Field(None, min_length=1, max_length=255)
    all_mats: str | None = Field(None, min_length=1, max_length=255)
    features: dict[int, list[FeatureType]] | None = None
    comments: str | None = None
    version: int | None = Field(None, ge=0)

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("name", "all_mats")
    @classmethod
    def required_not_null(cls, value, info: ValidationInfo):
        return reject_null(value, info.field_name)

    @model_validator(mode="after")
    def check_mats(self) -> "TemplateUpdate":
        if self.all_mats is not None:
            _check_feature_keys(self.all_mats, self.features)
        return self


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class TemplateResponse(AuditResponse):
    """Template information returned by the API."""

    facility_id: uuid.UUID
    name: str
    all_mats: str
    features: dict[int, list[FeatureType]] | None = None
    comments: str | None = None
