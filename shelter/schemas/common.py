"""Pydantic v2 schemas shared by every resource."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str


class AuditResponse(BaseModel):
    """Identity and audit fields carried by every stored record."""

    id: uuid.UUID
    published: datetime
    updated: datetime
    version: int

    model_config = ConfigDict(from_attributes=True)


def reject_null(value, field_name: str):
    """Validator body for required fields on partial-update schemas.

    Omitting a field leaves it unchanged; sending an explicit null is an error.
    """
    if value is None:
        raise ValueError(f"{field_name} may not be null")
    return value
