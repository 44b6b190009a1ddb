"""Find a facility's guest by full name, creating it if missing."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shelter.exceptions import BadRequest, NotUnique
from shelter.models.guest import Guest

logger = logging.getLogger(__name__)


async def find_guest_by_name(
    db: AsyncSession, facility_id: uuid.UUID, first_name: str, last_name: str
) -> Guest | None:
    """Exact, case-sensitive lookup of a guest within one facility."""
    result = await db.execute(
        select(Guest).where(
            Guest.facility_id == facility_id,
            Guest.first_name == first_name,
            Guest.last_name == last_name,
        )
    )
    return result.scalar_one_or_none()


async def resolve_guest(
    db: AsyncSession, facility_id: uuid.UUID, first_name: str | None, last_name: str | None
) -> Guest:
    """Return the facility's guest with this name, inserting one if none exists.

    An existing guest is returned untouched. A new guest is flushed right
    away so that repeated calls in the same transaction resolve to it rather
    than creating a duplicate.

    Raises:
        BadRequest: if either name is missing or blank.
        NotUnique: if a concurrent writer inserted the same name first. The
            caller's transaction is unusable afterwards and must be retried
            as a whole.
    """
    first = (first_name or "").strip()
    last = (last_name or "").strip()
    if not first or not last:
        raise BadRequest("Guest first_name and last_name are required")

    guest = await find_guest_by_name(db, facility_id, first, last)
    if guest is not None:
        return guest

    guest = Guest(facility_id=facility_id, first_name=first, last_name=last, comments=None)
    db.add(guest)
    try:
        await db.flush()
    except IntegrityError as exc:
        logger.warning("Concurrent creation of guest %s %s in facility %s", first, last, facility_id)
        raise NotUnique(f"Guest name '{first} {last}' is already in use in this facility") from exc

    logger.info("Created guest %s for %s %s in facility %s", guest.id, first, last, facility_id)
    return guest
