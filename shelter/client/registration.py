"""Client for ``/api/v1/registrations``."""

import uuid

from shelter.client.base import ResourceClient
from shelter.schemas.registration import Assign, RegistrationResponse


class RegistrationClient(ResourceClient):
    path = "/registrations"
    response_model = RegistrationResponse

    async def assign(self, registration_id: uuid.UUID, assign: Assign) -> RegistrationResponse:
        data = await self._post(registration_id, "assign", body=self._payload(assign), expected=200)
        return self._one(data)

    async def deassign(self, registration_id: uuid.UUID) -> RegistrationResponse:
        return self._one(await self._post(registration_id, "deassign", expected=200))
