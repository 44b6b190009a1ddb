"""Pydantic v2 schemas for the bulk registration import action."""

from datetime import time
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from shelter.models.types import FeatureType, PaymentType
from shelter.schemas.registration import RegistrationResponse


class ImportRequest(BaseModel):
    """One mat of an import batch.

    Without names this declares an unassigned mat; with ``first_name`` and
    ``last_name`` it also assigns the (resolved or newly created) guest.
    ``mat_number`` is checked by the importer so that a bad batch is rejected
    as a whole with a 400.
    """

    mat_number: int
    features: list[FeatureType] | None = None
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    payment_type: PaymentType | None = None
    payment_amount: Decimal | None = Field(None, ge=0)
    shower_time: time | None = None
    wakeup_time: time | None = None
    comments: str | None = None

    model_config = ConfigDict(use_enum_values=True)

    @property
    def assigned(self) -> bool:
        return self.first_name is not None or self.last_name is not None


class ImportResults(BaseModel):
    """Registrations created by one import, in request order."""

    registrations: list[RegistrationResponse]
