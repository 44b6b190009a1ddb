"""Client for ``/api/v1/facilities`` and the resources a facility owns."""

import uuid
from collections.abc import Sequence
from datetime import date

from pydantic import TypeAdapter

from shelter.client.base import ResourceClient
from shelter.schemas.facility import FacilityResponse
from shelter.schemas.guest import GuestResponse
from shelter.schemas.imports import ImportRequest, ImportResults
from shelter.schemas.registration import RegistrationResponse
from shelter.schemas.template import TemplateResponse

_guests = TypeAdapter(list[GuestResponse])
_registrations = TypeAdapter(list[RegistrationResponse])
_templates = TypeAdapter(list[TemplateResponse])


class FacilityClient(ResourceClient):
    path = "/facilities"
    response_model = FacilityResponse

    async def find_by_name(self, name: str) -> list[FacilityResponse]:
        """Facilities whose name contains ``name``, case-insensitively."""
        return self._many(await self._get("name", name))

    async def find_by_name_exact(self, name: str) -> FacilityResponse:
        return self._one(await self._get("nameExact", name))

    # Guests

    async def find_guests_by_facility_id(self, facility_id: uuid.UUID) -> list[GuestResponse]:
        return _guests.validate_python(await self._get(facility_id, "guests"))

    async def find_guests_by_name(self, facility_id: uuid.UUID, name: str) -> list[GuestResponse]:
        return _guests.validate_python(await self._get(facility_id, "guests", "name", name))

    async def find_guests_by_name_exact(
        self, facility_id: uuid.UUID, first_name: str, last_name: str
    ) -> GuestResponse:
        data = await self._get(facility_id, "guests", "nameExact", first_name, last_name)
        return GuestResponse.model_validate(data)

    # Registrations

    async def find_registrations_by_facility_and_date(
        self, facility_id: uuid.UUID, registration_date: date
    ) -> list[RegistrationResponse]:
        data = await self._get(facility_id, "registrations", registration_date.isoformat())
        return _registrations.validate_python(data)

    async def delete_registrations_by_facility_and_date(
        self, facility_id: uuid.UUID, registration_date: date
    ) -> list[RegistrationResponse]:
        """Delete a day's registrations and return them. Fails while any is assigned."""
        data = await self._delete(facility_id, "registrations", registration_date.isoformat())
        return _registrations.validate_python(data)

    async def import_registrations_by_facility_and_date(
        self,
        facility_id: uuid.UUID,
        registration_date: date,
        requests: Sequence[ImportRequest],
    ) -> list[RegistrationResponse]:
        """Import a day's mats; the result lines up with ``requests``."""
        data = await self._post(
            facility_id,
            "registrations",
            registration_date.isoformat(),
            "import",
            body=[self._payload(request) for request in requests],
        )
        return ImportResults.model_validate(data).registrations

    # Templates

    async def find_templates_by_facility_id(self, facility_id: uuid.UUID) -> list[TemplateResponse]:
        return _templates.validate_python(await self._get(facility_id, "templates"))

    async def find_templates_by_name(self, facility_id: uuid.UUID, name: str) -> list[TemplateResponse]:
        return _templates.validate_python(await self._get(facility_id, "templates", "name", name))

    async def find_templates_by_name_exact(self, facility_id: uuid.UUID, name: str) -> TemplateResponse:
        data = await self._get(facility_id, "templates", "nameExact", name)
        return TemplateResponse.model_validate(data)
