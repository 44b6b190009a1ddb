"""Tests for the DevMode reset endpoints."""

import pytest
from httpx import AsyncClient

from shelter.config import settings

pytestmark = pytest.mark.asyncio


class TestPopulate:
    async def test_populate(self, client: AsyncClient) -> None:
        response = await client.post("/api/v1/devmode/populate")

        assert response.status_code == 204
        names = [f["name"] for f in (await client.get("/api/v1/facilities")).json()]
        assert names == ["Chester", "Oakland", "San Francisco", "San Jose"]

    async def test_populate_twice_resets(self, client: AsyncClient) -> None:
        await client.post("/api/v1/devmode/populate")
        await client.post("/api/v1/facilities", json={"name": "Extra"})

        response = await client.post("/api/v1/devmode/populate")

        assert response.status_code == 204
        assert len((await client.get("/api/v1/facilities")).json()) == 4


class TestDepopulate:
    async def test_depopulate(self, client: AsyncClient) -> None:
        await client.post("/api/v1/devmode/populate")

        response = await client.post("/api/v1/devmode/depopulate")

        assert response.status_code == 204
        for resource in ("facilities", "guests", "bans", "registrations", "templates"):
            assert (await client.get(f"/api/v1/{resource}")).json() == []


class TestDevModeDisabled:
    @pytest.mark.parametrize("action", ["populate", "depopulate"])
    async def test_forbidden(self, client: AsyncClient, monkeypatch: pytest.MonkeyPatch, action: str) -> None:
        monkeypatch.setattr(settings, "devmode_enabled", False)

        response = await client.post(f"/api/v1/devmode/{action}")

        assert response.status_code == 403
