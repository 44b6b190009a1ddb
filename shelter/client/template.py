"""Client for ``/api/v1/templates``."""

import uuid
from datetime import date

from pydantic import TypeAdapter

from shelter.client.base import ResourceClient
from shelter.schemas.registration import RegistrationResponse
from shelter.schemas.template import TemplateResponse

_registrations = TypeAdapter(list[RegistrationResponse])


class TemplateClient(ResourceClient):
    path = "/templates"
    response_model = TemplateResponse

    async def generate(self, template_id: uuid.UUID, registration_date: date) -> list[RegistrationResponse]:
        """Lay out ``registration_date`` from the template, one unassigned mat each."""
        data = await self._post(template_id, "generate", registration_date.isoformat())
        return _registrations.validate_python(data)
