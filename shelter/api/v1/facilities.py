"""Facilities API router.

Besides plain CRUD, a facility is the entry point for everything it owns:
guest and template finders, the registrations of a given day, and the bulk
import of a day's registrations.
"""

import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from shelter.api.deps import check_version, flush_or_409, get_db, get_or_404
from shelter.models.ban import Ban
from shelter.models.facility import Facility
from shelter.models.guest import Guest
from shelter.models.registration import Registration
from shelter.models.template import Template
from shelter.schemas.common import MessageResponse
from shelter.schemas.facility import FacilityCreate, FacilityResponse, FacilityUpdate
from shelter.schemas.guest import GuestResponse
from shelter.schemas.imports import ImportRequest, ImportResults
from shelter.schemas.registration import RegistrationResponse
from shelter.schemas.template import TemplateResponse
from shelter.services.guest_resolver import find_guest_by_name
from shelter.services.registration_importer import import_registrations

router = APIRouter(prefix="/api/v1/facilities", tags=["facilities"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


async def _check_name_unique(
    db: AsyncSession,
    name: str,
    exclude_facility_id: uuid.UUID | None = None,
) -> None:
    """Raise 409 if another facility already uses this name."""
    query = select(Facility).where(Facility.name == name)
    if exclude_facility_id is not None:
        query = query.where(Facility.id != exclude_facility_id)
    result = await db.execute(query)
    if result.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Facility name '{name}' is already in use",
        )


# ---------------------------------------------------------------------------
# Facility CRUD
# ---------------------------------------------------------------------------


@router.get(
    "",
    response_model=list[FacilityResponse],
    summary="List all facilities ordered by name",
)
async def list_facilities(db: AsyncSession = Depends(get_db)) -> list[Facility]:
    result = await db.execute(select(Facility).order_by(Facility.name))
    return list(result.scalars().all())


@router.post(
    "",
    response_model=FacilityResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new facility",
)
async def create_facility(
    body: FacilityCreate,
    db: AsyncSession = Depends(get_db),
) -> Facility:
    """Create a facility. Raises 409 if the name is already in use."""
    await _check_name_unique(db, body.name)

    facility = Facility(**body.model_dump())
    db.add(facility)
    await flush_or_409(db, f"Facility name '{body.name}' is already in use")
    await db.refresh(facility)
    return facility


@router.get(
    "/name/{name}",
    response_model=list[FacilityResponse],
    summary="Search facilities by name (case-insensitive substring)",
)
async def find_facilities_by_name(
    name: str,
    db: AsyncSession = Depends(get_db),
) -> list[Facility]:
    result = await db.execute(
        select(Facility).where(Facility.name.ilike(f"%{name}%")).order_by(Facility.name)
    )
    return list(result.scalars().all())


@router.get(
    "/nameExact/{name}",
    response_model=FacilityResponse,
    summary="Get a facility by exact name",
)
async def find_facility_by_name_exact(
    name: str,
    db: AsyncSession = Depends(get_db),
) -> Facility:
    result = await db.execute(select(Facility).where(Facility.name == name))
    facility = result.scalar_one_or_none()
    if facility is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Facility '{name}' not found",
        )
    return facility


@router.get(
    "/{facility_id}",
    response_model=FacilityResponse,
    summary="Get a facility by ID",
)
async def get_facility(
    facility_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Facility:
    return await get_or_404(db, Facility, facility_id)


@router.put(
    "/{facility_id}",
    response_model=FacilityResponse,
    summary="Update a facility",
)
async def update_facility(
    facility_id: uuid.UUID,
    body: FacilityUpdate,
    db: AsyncSession = Depends(get_db),
) -> Facility:
    """Partially update a facility. Only explicitly provided fields are changed.

    If the name is being changed, checks that no other facility uses it.
    """
    facility = await get_or_404(db, Facility, facility_id)

    update_data = body.model_dump(exclude_unset=True)
    check_version(facility, update_data.pop("version", None))

    if "name" in update_data and update_data["name"] != facility.name:
        await _check_name_unique(db, update_data["name"], exclude_facility_id=facility_id)

    for field, value in update_data.items():
        setattr(facility, field, value)

    db.add(facility)
    await flush_or_409(db, f"Facility name '{facility.name}' is already in use")
    await db.refresh(facility)
    return facility


@router.delete(
    "/{facility_id}",
    response_model=MessageResponse,
    summary="Delete a facility and everything it owns",
)
async def delete_facility(
    facility_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Delete a facility. Cascades to its guests (and their bans),
    registrations and templates.
    """
    facility = await get_or_404(db, Facility, facility_id)

    guest_ids = select(Guest.id).where(Guest.facility_id == facility_id)
    await db.execute(delete(Ban).where(Ban.guest_id.in_(guest_ids)))
    await db.execute(delete(Registration).where(Registration.facility_id == facility_id))
    await db.execute(delete(Template).where(Template.facility_id == facility_id))
    await db.execute(delete(Guest).where(Guest.facility_id == facility_id))
    await db.delete(facility)
    await db.flush()
    return {"message": "Facility deleted"}


# ---------------------------------------------------------------------------
# Guests of a facility
# ---------------------------------------------------------------------------


@router.get(
    "/{facility_id}/guests",
    response_model=list[GuestResponse],
    summary="List a facility's guests ordered by last and first name",
)
async def list_facility_guests(
    facility_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> list[Guest]:
    result = await db.execute(
        select(Guest)
        .where(Guest.facility_id == facility_id)
        .order_by(Guest.last_name, Guest.first_name)
    )
    return list(result.scalars().all())


@router.get(
    "/{facility_id}/guests/name/{name}",
    response_model=list[GuestResponse],
    summary="Search a facility's guests by first or last name",
)
async def find_facility_guests_by_name(
    facility_id: uuid.UUID,
    name: str,
    db: AsyncSession = Depends(get_db),
) -> list[Guest]:
    pattern = f"%{name}%"
    result = await db.execute(
        select(Guest)
        .where(
            Guest.facility_id == facility_id,
            or_(Guest.first_name.ilike(pattern), Guest.last_name.ilike(pattern)),
        )
        .order_by(Guest.last_name, Guest.first_name)
    )
    return list(result.scalars().all())


@router.get(
    "/{facility_id}/guests/nameExact/{first_name}/{last_name}",
    response_model=GuestResponse,
    summary="Get a facility's guest by exact full name",
)
async def find_facility_guest_by_name_exact(
    facility_id: uuid.UUID,
    first_name: str,
    last_name: str,
    db: AsyncSession = Depends(get_db),
) -> Guest:
    guest = await find_guest_by_name(db, facility_id, first_name, last_name)
    if guest is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Guest '{first_name} {last_name}' not found",
        )
    return guest


# ---------------------------------------------------------------------------
# Registrations of a facility on a date
# ---------------------------------------------------------------------------


@router.get(
    "/{facility_id}/registrations/{registration_date}",
    response_model=list[RegistrationResponse],
    summary="List a facility's registrations for one date ordered by mat",
)
async def list_facility_registrations(
    facility_id: uuid.UUID,
    registration_date: date,
    db: AsyncSession = Depends(get_db),
) -> list[Registration]:
    result = await db.execute(
        select(Registration)
        .where(
            Registration.facility_id == facility_id,
            Registration.registration_date == registration_date,
        )
        .order_by(Registration.mat_number)
    )
    return list(result.scalars().all())


@router.delete(
    "/{facility_id}/registrations/{registration_date}",
    response_model=list[RegistrationResponse],
    summary="Delete a facility's registrations for one date",
)
async def delete_facility_registrations(
    facility_id: uuid.UUID,
    registration_date: date,
    db: AsyncSession = Depends(get_db),
) -> list[RegistrationResponse]:
    """Delete every registration of the day and return what was deleted.

    Raises 409 while any of them still has a guest assigned; deassign first.
    """
    result = await db.execute(
        select(Registration)
        .where(
            Registration.facility_id == facility_id,
            Registration.registration_date == registration_date,
        )
        .order_by(Registration.mat_number)
    )
    registrations = list(result.scalars().all())

    assigned = [r.mat_number for r in registrations if r.assigned]
    if assigned:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Mats {assigned} are still assigned; deassign them first",
        )

    deleted = [RegistrationResponse.model_validate(r) for r in registrations]
    for registration in registrations:
        await db.delete(registration)
    await db.flush()
    return deleted


@router.post(
    "/{facility_id}/registrations/{registration_date}/import",
    response_model=ImportResults,
    status_code=status.HTTP_201_CREATED,
    summary="Import a day's registrations, resolving or creating guests",
)
async def import_facility_registrations(
    facility_id: uuid.UUID,
    registration_date: date,
    body: list[ImportRequest],
    db: AsyncSession = Depends(get_db),
) -> dict:
    """All-or-nothing: either every mat of the body is registered, or none is."""
    registrations = await import_registrations(db, facility_id, registration_date, body)
    return {"registrations": registrations}


# ---------------------------------------------------------------------------
# Templates of a facility
# ---------------------------------------------------------------------------


@router.get(
    "/{facility_id}/templates",
    response_model=list[TemplateResponse],
    summary="List a facility's templates ordered by name",
)
async def list_facility_templates(
    facility_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> list[Template]:
    result = await db.execute(
        select(Template).where(Template.facility_id == facility_id).order_by(Template.name)
    )
    return list(result.scalars().all())


@router.get(
    "/{facility_id}/templates/name/{name}",
    response_model=list[TemplateResponse],
    summary="Search a facility's templates by name (case-insensitive substring)",
)
async def find_facility_templates_by_name(
    facility_id: uuid.UUID,
    name: str,
    db: AsyncSession = Depends(get_db),
) -> list[Template]:
    result = await db.execute(
        select(Template)
        .where(Template.facility_id == facility_id, Template.name.ilike(f"%{name}%"))
        .order_by(Template.name)
    )
    return list(result.scalars().all())


@router.get(
    "/{facility_id}/templates/nameExact/{name}",
    response_model=TemplateResponse,
    summary="Get a facility's template by exact name",
)
async def find_facility_template_by_name_exact(
    facility_id: uuid.UUID,
    name: str,
    db: AsyncSession = Depends(get_db),
) -> Template:
    result = await db.execute(
        select(Template).where(Template.facility_id == facility_id, Template.name == name)
    )
    template = result.scalar_one_or_none()
    if template is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Template '{name}' not found",
        )
    return template
