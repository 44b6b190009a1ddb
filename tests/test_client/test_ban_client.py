"""Integration tests for BanClient against the DevMode fixture data."""

import uuid
from datetime import date

import pytest

from shelter.client import BanClient, FacilityClient
from shelter.exceptions import BadRequest, NotFound
from shelter.schemas.ban import BanCreate, BanUpdate

pytestmark = [pytest.mark.asyncio, pytest.mark.usefixtures("populated")]


async def _guest(facility_client: FacilityClient, facility_name: str, first_name: str, last_name: str):
    facility = await facility_client.find_by_name_exact(facility_name)
    return await facility_client.find_guests_by_name_exact(facility.id, first_name, last_name)


class TestBanClient:
    async def test_find_all_ordered(self, ban_client: BanClient):
        bans = await ban_client.find_all()
        assert len(bans) == 3

    async def test_insert_update_delete(self, ban_client: BanClient, facility_client: FacilityClient):
        wilma = await _guest(facility_client, "San Jose", "Wilma", "Flintstone")

        inserted = await ban_client.insert(
            BanCreate(guest_id=wilma.id, ban_from=date(2020, 11, 1), ban_to=date(2020, 11, 7), staff="Manager")
        )
        updated = await ban_client.update(inserted.id, BanUpdate(active=False, version=inserted.version))
        await ban_client.delete(inserted.id)

        assert inserted.active is True
        assert updated.active is False
        assert updated.version == 1
        with pytest.raises(NotFound):
            await ban_client.find(inserted.id)

    async def test_insert_reversed_range(self, ban_client: BanClient, facility_client: FacilityClient):
        wilma = await _guest(facility_client, "San Jose", "Wilma", "Flintstone")
        with pytest.raises(BadRequest):
            await ban_client.insert(
                BanCreate.model_construct(guest_id=wilma.id, ban_from=date(2020, 11, 7), ban_to=date(2020, 11, 1))
            )

    async def test_insert_unknown_guest(self, ban_client: BanClient):
        with pytest.raises(NotFound):
            await ban_client.insert(BanCreate(guest_id=uuid.uuid4(), ban_from=date(2020, 1, 1), ban_to=date(2020, 1, 2)))
