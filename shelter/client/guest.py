"""Client for ``/api/v1/guests``."""

import uuid
from datetime import date

from pydantic import TypeAdapter

from shelter.client.base import ResourceClient
from shelter.schemas.ban import BanResponse
from shelter.schemas.guest import GuestResponse

_bans = TypeAdapter(list[BanResponse])


class GuestClient(ResourceClient):
    path = "/guests"
    response_model = GuestResponse

    async def find_bans_by_guest_id(self, guest_id: uuid.UUID) -> list[BanResponse]:
        return _bans.validate_python(await self._get(guest_id, "bans"))

    async def find_bans_by_guest_id_and_registration_date(
        self, guest_id: uuid.UUID, registration_date: date
    ) -> BanResponse:
        """The active ban covering ``registration_date``; ``NotFound`` if none."""
        data = await self._get(guest_id, "bans", registration_date.isoformat())
        return BanResponse.model_validate(data)
