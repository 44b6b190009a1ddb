"""Client for ``/api/v1/bans``."""

from shelter.client.base import ResourceClient
from shelter.schemas.ban import BanResponse


class BanClient(ResourceClient):
    path = "/bans"
    response_model = BanResponse
