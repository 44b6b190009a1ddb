"""Client for ``/api/v1/devmode``, used to reset state between integration tests."""

from fastapi import status

from shelter.client.base import AbstractClient


class DevModeClient(AbstractClient):
    path = "/devmode"

    async def populate(self) -> None:
        await self._post("populate", expected=status.HTTP_204_NO_CONTENT)

    async def depopulate(self) -> None:
        await self._post("depopulate", expected=status.HTTP_204_NO_CONTENT)
