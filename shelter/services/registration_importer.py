"""Bulk-create a day's mats from an external list.

Each import request declares one mat. Unassigned declarations become bare
registrations; assigned ones resolve (or create) the named guest first. The
batch is all-or-nothing:

- the whole list is validated before anything is written,
- existing registrations for the date are checked for collisions up front,
- a unique-constraint violation raised by the store mid-batch (a concurrent
  importer won the race) is surfaced as ``NotUnique`` and the request's
  transaction is rolled back by ``get_db``.
"""

import logging
import uuid
from collections import Counter
from collections.abc import Sequence
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shelter.exceptions import BadRequest, NotFound, NotUnique
from shelter.models.facility import Facility
from shelter.models.registration import Registration
from shelter.models.types import feature_values
from shelter.schemas.imports import ImportRequest
from shelter.services.guest_resolver import resolve_guest
from shelter.services.mats import format_mats

logger = logging.getLogger(__name__)


def _validate_requests(requests: Sequence[ImportRequest]) -> None:
    """Reject a malformed batch before any persistence happens."""
    if not requests:
        raise BadRequest("Import must contain at least one registration")

    for request in requests:
        if request.mat_number is None or request.mat_number < 1:
            raise BadRequest(f"Mat number must be a positive integer, got {request.mat_number}")
        if request.assigned:
            if not (request.first_name or "").strip() or not (request.last_name or "").strip():
                raise BadRequest(f"Mat {request.mat_number}: both first_name and last_name are required")
            if request.payment_type is None:
                raise BadRequest(f"Mat {request.mat_number}: payment_type is required for an assigned mat")

    duplicates = sorted(mat for mat, count in Counter(r.mat_number for r in requests).items() if count > 1)
    if duplicates:
        raise BadRequest(f"Mat numbers {format_mats(duplicates)} appear more than once in the import")


async def find_registered_mats(
    db: AsyncSession,
    facility_id: uuid.UUID,
    registration_date: date,
    mat_numbers: Sequence[int],
) -> list[int]:
    """Return which of ``mat_numbers`` already have a registration on that date."""
    result = await db.execute(
        select(Registration.mat_number)
        .where(
            Registration.facility_id == facility_id,
            Registration.registration_date == registration_date,
            Registration.mat_number.in_(list(mat_numbers)),
        )
        .order_by(Registration.mat_number)
    )
    return list(result.scalars().all())


async def import_registrations(
    db: AsyncSession,
    facility_id: uuid.UUID,
    registration_date: date,
    requests: Sequence[ImportRequest],
) -> list[Registration]:
    """Create one registration per request; ``result[i]`` matches ``requests[i]``.

    Raises:
        NotFound: if the facility does not exist.
        BadRequest: if the batch is empty or any request is malformed,
            including duplicate mat numbers within the batch.
        NotUnique: if any mat is already registered for this date, or a
            concurrent writer claims a mat or guest name during the import.
    """
    facility = await db.get(Facility, facility_id)
    if facility is None:
        raise NotFound(f"Facility {facility_id} not found")

    _validate_requests(requests)

    taken = await find_registered_mats(db, facility_id, registration_date, [r.mat_number for r in requests])
    if taken:
        logger.info(
            "Rejected import for %s on %s: mats %s already registered",
            facility.name,
            registration_date,
            format_mats(taken),
        )
        raise NotUnique(
            f"Mats {format_mats(taken)} are already registered at {facility.name} on {registration_date.isoformat()}"
        )

    registrations: list[Registration] = []
    assigned = 0
    try:
        for request in requests:
            registration = Registration(
                facility_id=facility_id,
                registration_date=registration_date,
                mat_number=request.mat_number,
                features=feature_values(request.features),
            )
            if request.assigned:
                guest = await resolve_guest(db, facility_id, request.first_name, request.last_name)
                registration.guest_id = guest.id
                registration.payment_type = request.payment_type
                registration.payment_amount = request.payment_amount
                registration.shower_time = request.shower_time
                registration.wakeup_time = request.wakeup_time
                registration.comments = request.comments
                assigned += 1
            db.add(registration)
            registrations.append(registration)
        await db.flush()
    except IntegrityError as exc:
        raise NotUnique(
            f"Import for {facility.name} on {registration_date.isoformat()} collided with a concurrent change"
        ) from exc

    logger.info(
        "Imported %d registrations (%d assigned) for %s on %s",
        len(registrations),
        assigned,
        facility.name,
        registration_date,
    )
    return registrations
