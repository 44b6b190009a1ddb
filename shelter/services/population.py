"""DevMode fixture data: wipe and re-seed the database for integration tests.

The fixture is small but deliberately overlapping: every facility has the
same guest names (uniqueness is per facility), two templates, and a couple
of facilities already have a generated day of registrations.
"""

import logging
from datetime import date, time

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from shelter.exceptions import NotUnique
from shelter.models.ban import Ban
from shelter.models.facility import Facility
from shelter.models.guest import Guest
from shelter.models.registration import Registration
from shelter.models.template import Template
from shelter.models.types import FeatureType, PaymentType
from shelter.services.template_generator import generate_registrations

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

FACILITIES = [
    {
        "name": "Chester",
        "address1": "125 E 5th Street",
        "city": "Chester",
        "state": "PA",
        "zip_code": "19013",
        "email": "chester@cityteam.org",
        "phone": "610-872-6865",
    },
    {
        "name": "Oakland",
        "address1": "722 Washington Street",
        "city": "Oakland",
        "state": "CA",
        "zip_code": "94607",
        "email": "oakland@cityteam.org",
        "phone": "510-452-3758",
    },
    {
        "name": "San Francisco",
        "address1": "164 6th Street",
        "city": "San Francisco",
        "state": "CA",
        "zip_code": "94103",
        "email": "sanfrancisco@cityteam.org",
        "phone": "415-861-8688",
    },
    {
        "name": "San Jose",
        "address1": "2306 Zanker Road",
        "city": "San Jose",
        "state": "CA",
        "zip_code": "95131",
        "email": "sanjose@cityteam.org",
        "phone": "408-232-5600",
    },
]

GUESTS = [
    {"first_name": "Fred", "last_name": "Flintstone", "comments": "Yabba dabba doo"},
    {"first_name": "Wilma", "last_name": "Flintstone", "comments": None},
    {"first_name": "Barney", "last_name": "Rubble", "comments": None},
    {"first_name": "Betty", "last_name": "Rubble", "comments": None},
    {"first_name": "Bam Bam", "last_name": "Rubble", "comments": "Strong kid"},
]

H = FeatureType.H.value
S = FeatureType.S.value

# "{facility} COVID" and "{facility} Standard" for every facility
TEMPLATES = [
    {
        "suffix": "COVID",
        "all_mats": "1-12",
        "features": {"1": [H], "3": [H, S], "5": [S]},
        "comments": "Reduced capacity with distancing",
    },
    {
        "suffix": "Standard",
        "all_mats": "1-24",
        "features": {"1": [H], "2": [H]},
        "comments": "Full capacity",
    },
]

REGISTRATION_DATE = date(2020, 7, 4)
REGISTRATION_FACILITIES = ("Chester", "Oakland")

# (mat, first, last, payment type, shower, wakeup)
ASSIGNMENTS = [
    (1, "Fred", "Flintstone", PaymentType.CASH.value, time(4, 0), None),
    (2, "Barney", "Rubble", PaymentType.AG.value, None, time(3, 30)),
]

BANNED_FACILITY = "San Francisco"

# (first, last, active, from, to)
BANS = [
    ("Fred", "Flintstone", True, date(2020, 8, 1), date(2020, 8, 31)),
    ("Fred", "Flintstone", True, date(2020, 10, 1), date(2020, 10, 31)),
    ("Barney", "Rubble", False, date(2020, 9, 1), date(2020, 9, 30)),
]


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


async def depopulate(db: AsyncSession) -> None:
    """Delete every row of every table, children first."""
    for model in (Ban, Registration, Template, Guest, Facility):
        await db.execute(delete(model))
    db.expunge_all()
    logger.info("Depopulated all tables")


async def populate(db: AsyncSession) -> None:
    """Insert the fixture data. The database must be empty.

    Raises:
        NotUnique: if any facility already exists.
    """
    existing = (await db.execute(select(func.count()).select_from(Facility))).scalar_one()
    if existing:
        raise NotUnique("Database is already populated; depopulate it first")

    for data in FACILITIES:
        facility = Facility(**data)
        db.add(facility)
        await db.flush()

        guests = {}
        for guest_data in GUESTS:
            guest = Guest(facility_id=facility.id, **guest_data)
            db.add(guest)
            guests[(guest.first_name, guest.last_name)] = guest

        templates = {}
        for template_data in TEMPLATES:
            template = Template(
                facility_id=facility.id,
                name=f"{facility.name} {template_data['suffix']}",
                all_mats=template_data["all_mats"],
                features=template_data["features"],
                comments=template_data["comments"],
            )
            db.add(template)
            templates[template_data["suffix"]] = template
        await db.flush()

        if facility.name in REGISTRATION_FACILITIES:
            registrations = await generate_registrations(db, templates["COVID"].id, REGISTRATION_DATE)
            by_mat = {r.mat_number: r for r in registrations}
            for mat, first, last, payment_type, shower, wakeup in ASSIGNMENTS:
                registration = by_mat[mat]
                registration.guest_id = guests[(first, last)].id
                registration.payment_type = payment_type
                registration.shower_time = shower
                registration.wakeup_time = wakeup
                registration.comments = f"{first} in {facility.name}"

        if facility.name == BANNED_FACILITY:
            for first, last, active, ban_from, ban_to in BANS:
                db.add(
                    Ban(
                        guest_id=guests[(first, last)].id,
                        active=active,
                        ban_from=ban_from,
                        ban_to=ban_to,
                        comments=f"{facility.name} ban for {first} {last}",
                        staff="Front Desk",
                    )
                )

    await db.flush()
    logger.info("Populated %d facilities with guests, templates, registrations and bans", len(FACILITIES))
