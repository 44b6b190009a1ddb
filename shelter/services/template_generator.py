"""Lay out a full day of unassigned mats from a template."""

import logging
import uuid
from datetime import date

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from shelter.exceptions import BadRequest, NotFound, NotUnique
from shelter.models.registration import Registration
from shelter.models.template import Template
from shelter.services.mats import parse_mats
from shelter.services.registration_importer import find_registered_mats

logger = logging.getLogger(__name__)


async def generate_registrations(
    db: AsyncSession, template_id: uuid.UUID, registration_date: date
) -> list[Registration]:
    """Create one unassigned registration per template mat, ascending by mat.

    Mats listed in the template's feature map get exactly those features;
    every other mat keeps ``features`` unset (None, not an empty list).

    Generation is not idempotent: running it again for the same template and
    date fails, and nothing is written, until that day's registrations are
    deleted.

    Raises:
        NotFound: if the template does not exist.
        BadRequest: if the stored mats list cannot be parsed.
        NotUnique: naming the lowest mat that is already registered.
    """
    template = await db.get(Template, template_id)
    if template is None:
        raise NotFound(f"Template {template_id} not found")

    try:
        mats = parse_mats(template.all_mats)
    except ValueError as exc:
        raise BadRequest(f"Template '{template.name}' has an invalid mats list: {exc}") from exc

    taken = await find_registered_mats(db, template.facility_id, registration_date, mats)
    if taken:
        raise NotUnique(
            f"Mat {taken[0]} is already registered on {registration_date.isoformat()}; "
            f"delete that day's registrations before regenerating from '{template.name}'"
        )

    registrations = [
        Registration(
            facility_id=template.facility_id,
            registration_date=registration_date,
            mat_number=mat,
            features=template.features_for(mat),
        )
        for mat in mats
    ]
    db.add_all(registrations)
    try:
        await db.flush()
    except IntegrityError as exc:
        raise NotUnique(
            f"Generating '{template.name}' for {registration_date.isoformat()} collided with a concurrent change"
        ) from exc

    logger.info(
        "Generated %d registrations from template %r for %s",
        len(registrations),
        template.name,
        registration_date,
    )
    return registrations
