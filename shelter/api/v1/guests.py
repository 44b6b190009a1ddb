"""Guests CRUD API router.

Guest names are unique per facility, not globally: the same person showing
up at two facilities is two guest records.
"""

import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shelter.api.deps import check_version, flush_or_409, get_db, get_or_404
from shelter.models.ban import Ban
from shelter.models.facility import Facility
from shelter.models.guest import Guest
from shelter.models.registration import Registration
from shelter.schemas.ban import BanResponse
from shelter.schemas.common import MessageResponse
from shelter.schemas.guest import GuestCreate, GuestResponse, GuestUpdate

router = APIRouter(prefix="/api/v1/guests", tags=["guests"])


async def _check_name_unique(
    db: AsyncSession,
    facility_id: uuid.UUID,
    first_name: str,
    last_name: str,
    exclude_guest_id: uuid.UUID | None = None,
) -> None:
    query = select(Guest).where(
        Guest.facility_id == facility_id,
        Guest.first_name == first_name,
        Guest.last_name == last_name,
    )
    if exclude_guest_id is not None:
        query = query.where(Guest.id != exclude_guest_id)
    existing = await db.execute(query)
    if existing.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Guest name '{first_name} {last_name}' is already in use in this facility",
        )


@router.post(
    "",
    response_model=GuestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new guest",
)
async def create_guest(
    body: GuestCreate,
    db: AsyncSession = Depends(get_db),
) -> Guest:
    """Create a new guest in the given facility.

    Raises 404 if the facility does not exist and 409 if the facility
    already has a guest with the same first and last name.
    """
    await get_or_404(db, Facility, body.facility_id)
    await _check_name_unique(db, body.facility_id, body.first_name, body.last_name)

    guest = Guest(**body.model_dump())
    db.add(guest)
    await flush_or_409(db, f"Guest name '{body.first_name} {body.last_name}' is already in use in this facility")
    await db.refresh(guest)
    return guest


@router.get(
    "",
    response_model=list[GuestResponse],
    summary="List all guests",
)
async def list_guests(db: AsyncSession = Depends(get_db)) -> list[Guest]:
    """Return every guest ordered by facility, last name and first name."""
    result = await db.execute(
        select(Guest).order_by(Guest.facility_id, Guest.last_name, Guest.first_name)
    )
    return list(result.scalars().all())


@router.get(
    "/{guest_id}",
    response_model=GuestResponse,
    summary="Get guest details",
)
async def get_guest(
    guest_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Guest:
    return await get_or_404(db, Guest, guest_id)


@router.put(
    "/{guest_id}",
    response_model=GuestResponse,
    summary="Update a guest",
)
async def update_guest(
    guest_id: uuid.UUID,
    body: GuestUpdate,
    db: AsyncSession = Depends(get_db),
) -> Guest:
    """Partially update a guest. Only explicitly provided fields are changed.

    Moving a guest to another facility or renaming it re-checks the
    per-facility name uniqueness.
    """
    guest = await get_or_404(db, Guest, guest_id)

    update_data = body.model_dump(exclude_unset=True)
    check_version(guest, update_data.pop("version", None))

    facility_id = update_data.get("facility_id", guest.facility_id)
    first_name = update_data.get("first_name", guest.first_name)
    last_name = update_data.get("last_name", guest.last_name)
    if facility_id != guest.facility_id:
        await get_or_404(db, Facility, facility_id)
    if (facility_id, first_name, last_name) != (guest.facility_id, guest.first_name, guest.last_name):
        await _check_name_unique(db, facility_id, first_name, last_name, exclude_guest_id=guest_id)

    for field, value in update_data.items():
        setattr(guest, field, value)

    db.add(guest)
    await flush_or_409(db, f"Guest name '{first_name} {last_name}' is already in use in this facility")
    await db.refresh(guest)
    return guest


@router.delete(
    "/{guest_id}",
    response_model=MessageResponse,
    summary="Delete a guest",
)
async def delete_guest(
    guest_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Delete a guest and their bans.

    Registrations the guest was assigned to are kept but deassigned.
    """
    guest = await get_or_404(db, Guest, guest_id)

    result = await db.execute(select(Registration).where(Registration.guest_id == guest_id))
    for registration in result.scalars().all():
        registration.clear_assignment()
    await db.flush()

    await db.delete(guest)
    await db.flush()
    return {"message": "Guest deleted"}


# ---------------------------------------------------------------------------
# Bans of a guest
# ---------------------------------------------------------------------------


@router.get(
    "/{guest_id}/bans",
    response_model=list[BanResponse],
    summary="List a guest's bans ordered by start date",
)
async def list_guest_bans(
    guest_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> list[Ban]:
    result = await db.execute(select(Ban).where(Ban.guest_id == guest_id).order_by(Ban.ban_from))
    return list(result.scalars().all())


@router.get(
    "/{guest_id}/bans/{registration_date}",
    response_model=BanResponse,
    summary="Get the active ban covering a date",
)
async def get_guest_ban_for_date(
    guest_id: uuid.UUID,
    registration_date: date,
    db: AsyncSession = Depends(get_db),
) -> Ban:
    """Return the guest's active ban whose range includes the date, or 404."""
    result = await db.execute(
        select(Ban)
        .where(
            Ban.guest_id == guest_id,
            Ban.active.is_(True),
            Ban.ban_from <= registration_date,
            Ban.ban_to >= registration_date,
        )
        .order_by(Ban.ban_from)
    )
    ban = result.scalars().first()
    if ban is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No active ban covers {registration_date.isoformat()}",
        )
    return ban
