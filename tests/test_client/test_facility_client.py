"""Integration tests for FacilityClient against the DevMode fixture data."""

import uuid
from datetime import date, time

import pytest

from shelter.client import FacilityClient
from shelter.exceptions import BadRequest, NotFound, NotUnique
from shelter.schemas.facility import FacilityCreate, FacilityUpdate
from shelter.schemas.imports import ImportRequest

pytestmark = [pytest.mark.asyncio, pytest.mark.usefixtures("populated")]


class TestFacilityFinders:
    async def test_find_all_ordered_by_name(self, facility_client: FacilityClient):
        facilities = await facility_client.find_all()

        names = [f.name for f in facilities]
        assert names == sorted(names)
        assert len(names) == 4

    async def test_find(self, facility_client: FacilityClient):
        for facility in await facility_client.find_all():
            assert await facility_client.find(facility.id) == facility

    async def test_find_not_found(self, facility_client: FacilityClient):
        with pytest.raises(NotFound):
            await facility_client.find(uuid.uuid4())

    async def test_find_by_name(self, facility_client: FacilityClient):
        facilities = await facility_client.find_by_name("san")
        assert [f.name for f in facilities] == ["San Francisco", "San Jose"]

    async def test_find_by_name_no_match(self, facility_client: FacilityClient):
        assert await facility_client.find_by_name("unmatched") == []

    async def test_find_by_name_exact(self, facility_client: FacilityClient):
        for facility in await facility_client.find_all():
            found = await facility_client.find_by_name_exact(facility.name)
            assert found.id == facility.id

    async def test_find_by_name_exact_not_found(self, facility_client: FacilityClient):
        with pytest.raises(NotFound):
            await facility_client.find_by_name_exact("Unmatched")


class TestFacilityWrites:
    async def test_insert(self, facility_client: FacilityClient):
        inserted = await facility_client.insert(FacilityCreate(name="Sacramento", state="CA"))

        assert inserted.id is not None
        assert inserted.published is not None
        assert inserted.updated is not None
        assert inserted.version == 0
        assert inserted.name == "Sacramento"

    async def test_insert_missing_name(self, facility_client: FacilityClient):
        with pytest.raises(BadRequest):
            await facility_client.insert(FacilityCreate.model_construct(city="Nowhere"))

    async def test_insert_not_unique(self, facility_client: FacilityClient):
        with pytest.raises(NotUnique):
            await facility_client.insert(FacilityCreate(name="Chester"))

    async def test_update(self, facility_client: FacilityClient):
        chester = await facility_client.find_by_name_exact("Chester")

        updated = await facility_client.update(
            chester.id, FacilityUpdate(address2="Suite 100", version=chester.version)
        )

        assert updated.address2 == "Suite 100"
        assert updated.address1 == chester.address1
        assert updated.version == chester.version + 1

    async def test_update_null_name(self, facility_client: FacilityClient):
        chester = await facility_client.find_by_name_exact("Chester")
        with pytest.raises(BadRequest):
            await facility_client.update(chester.id, FacilityUpdate.model_construct(name=None))

    async def test_update_not_unique(self, facility_client: FacilityClient):
        chester = await facility_client.find_by_name_exact("Chester")
        with pytest.raises(NotUnique):
            await facility_client.update(chester.id, FacilityUpdate(name="Oakland"))

    async def test_delete(self, facility_client: FacilityClient):
        for facility in await facility_client.find_all():
            await facility_client.delete(facility.id)
            with pytest.raises(NotFound):
                await facility_client.find(facility.id)
        assert await facility_client.find_all() == []

    async def test_delete_not_found(self, facility_client: FacilityClient):
        with pytest.raises(NotFound):
            await facility_client.delete(uuid.uuid4())


class TestFacilityGuestsAndTemplates:
    async def test_find_guests_by_facility_id(self, facility_client: FacilityClient):
        chester = await facility_client.find_by_name_exact("Chester")

        guests = await facility_client.find_guests_by_facility_id(chester.id)

        names = [(g.last_name, g.first_name) for g in guests]
        assert names == sorted(names)
        assert len(guests) == 5

    async def test_find_guests_by_facility_id_no_match(self, facility_client: FacilityClient):
        assert await facility_client.find_guests_by_facility_id(uuid.uuid4()) == []

    async def test_find_guests_by_name(self, facility_client: FacilityClient):
        oakland = await facility_client.find_by_name_exact("Oakland")

        guests = await facility_client.find_guests_by_name(oakland.id, "flint")

        assert [g.first_name for g in guests] == ["Fred", "Wilma"]

    async def test_find_guests_by_name_exact(self, facility_client: FacilityClient):
        oakland = await facility_client.find_by_name_exact("Oakland")

        guest = await facility_client.find_guests_by_name_exact(oakland.id, "Bam Bam", "Rubble")

        assert guest.facility_id == oakland.id

        with pytest.raises(NotFound):
            await facility_client.find_guests_by_name_exact(oakland.id, "Pebbles", "Flintstone")

    async def test_find_templates(self, facility_client: FacilityClient):
        san_jose = await facility_client.find_by_name_exact("San Jose")

        templates = await facility_client.find_templates_by_facility_id(san_jose.id)
        covid = await facility_client.find_templates_by_name(san_jose.id, "covid")
        exact = await facility_client.find_templates_by_name_exact(san_jose.id, "San Jose Standard")

        assert [t.name for t in templates] == ["San Jose COVID", "San Jose Standard"]
        assert [t.name for t in covid] == ["San Jose COVID"]
        assert exact.all_mats == "1-24"
        assert await facility_client.find_templates_by_facility_id(uuid.uuid4()) == []

        with pytest.raises(NotFound):
            await facility_client.find_templates_by_name_exact(san_jose.id, "San Jose Overflow")


class TestFacilityRegistrations:
    async def test_find_registrations_by_facility_and_date(self, facility_client: FacilityClient):
        chester = await facility_client.find_by_name_exact("Chester")

        registrations = await facility_client.find_registrations_by_facility_and_date(chester.id, date(2020, 7, 4))

        assert [r.mat_number for r in registrations] == list(range(1, 13))
        assert registrations[0].shower_time == time(4, 0)

    async def test_delete_registrations_refused_while_assigned(self, facility_client: FacilityClient):
        chester = await facility_client.find_by_name_exact("Chester")
        with pytest.raises(NotUnique):
            await facility_client.delete_registrations_by_facility_and_date(chester.id, date(2020, 7, 4))

    async def test_delete_registrations_by_facility_and_date(
        self, facility_client: FacilityClient, registration_client
    ):
        oakland = await facility_client.find_by_name_exact("Oakland")
        registrations = await facility_client.find_registrations_by_facility_and_date(oakland.id, date(2020, 7, 4))
        for registration in registrations:
            if registration.guest_id is not None:
                await registration_client.deassign(registration.id)

        deleted = await facility_client.delete_registrations_by_facility_and_date(oakland.id, date(2020, 7, 4))

        assert len(deleted) == len(registrations)
        assert await facility_client.find_registrations_by_facility_and_date(oakland.id, date(2020, 7, 4)) == []

    async def test_import_san_jose(self, facility_client: FacilityClient):
        san_jose = await facility_client.find_by_name_exact("San Jose")
        import_date = date(2020, 7, 6)
        requests = [
            ImportRequest(mat_number=1, features=["H"]),
            ImportRequest(mat_number=2, features=["S"]),
            ImportRequest(mat_number=3, features=["H", "S"]),
            ImportRequest(
                mat_number=4, first_name="Fred", last_name="Flintstone", payment_type="AG", shower_time=time(4, 0)
            ),
            ImportRequest(
                mat_number=5, first_name="Bam Bam", last_name="Rubble", payment_type="$$", wakeup_time=time(3, 30)
            ),
            ImportRequest(
                mat_number=6,
                first_name="Barney",
                last_name="Rubble",
                payment_type="MM",
                shower_time=time(4, 0),
                wakeup_time=time(3, 30),
            ),
            ImportRequest(mat_number=7, first_name="New", last_name="Person", payment_type="CT"),
        ]

        results = await facility_client.import_registrations_by_facility_and_date(
            san_jose.id, import_date, requests
        )

        assert len(results) == 7
        assert [r.mat_number for r in results] == [1, 2, 3, 4, 5, 6, 7]
        assert [r.features for r in results[:3]] == [["H"], ["S"], ["H", "S"]]
        assert all(r.guest_id is None for r in results[:3])
        assert results[3].payment_type == "AG"
        assert results[3].shower_time == time(4, 0)
        assert results[4].wakeup_time == time(3, 30)

        fred = await facility_client.find_guests_by_name_exact(san_jose.id, "Fred", "Flintstone")
        new_person = await facility_client.find_guests_by_name_exact(san_jose.id, "New", "Person")
        assert results[3].guest_id == fred.id
        assert results[6].guest_id == new_person.id
        assert len(await facility_client.find_guests_by_facility_id(san_jose.id)) == 6

        retrieved = await facility_client.find_registrations_by_facility_and_date(san_jose.id, import_date)
        assert retrieved == results

    async def test_import_duplicate_mat(self, facility_client: FacilityClient):
        san_jose = await facility_client.find_by_name_exact("San Jose")

        with pytest.raises(BadRequest):
            await facility_client.import_registrations_by_facility_and_date(
                san_jose.id,
                date(2020, 7, 6),
                [ImportRequest(mat_number=1), ImportRequest(mat_number=1)],
            )

        assert await facility_client.find_registrations_by_facility_and_date(san_jose.id, date(2020, 7, 6)) == []

    async def test_import_over_generated_day(self, facility_client: FacilityClient):
        chester = await facility_client.find_by_name_exact("Chester")

        with pytest.raises(NotUnique):
            await facility_client.import_registrations_by_facility_and_date(
                chester.id, date(2020, 7, 4), [ImportRequest(mat_number=13), ImportRequest(mat_number=12)]
            )

        registrations = await facility_client.find_registrations_by_facility_and_date(chester.id, date(2020, 7, 4))
        assert len(registrations) == 12
