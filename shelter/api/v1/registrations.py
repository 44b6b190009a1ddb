"""Registrations CRUD API router, plus guest assignment.

A registration is one mat at one facility on one date. It starts out
unassigned; ``assign`` puts a guest on it and ``deassign`` frees it again.
"""

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shelter.api.deps import check_version, flush_or_409, get_db, get_or_404
from shelter.models.facility import Facility
from shelter.models.guest import Guest
from shelter.models.registration import ASSIGNMENT_FIELDS, Registration
from shelter.models.types import feature_values
from shelter.schemas.common import MessageResponse
from shelter.schemas.registration import (
    Assign,
    RegistrationCreate,
    RegistrationResponse,
    RegistrationUpdate,
)
from shelter.services.registration_importer import find_registered_mats

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/registrations", tags=["registrations"])


def _slot_taken(registration_date, mat_number) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"Mat {mat_number} is already registered on {registration_date.isoformat()}",
    )


# ---------------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------------


@router.post(
    "",
    response_model=RegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an unassigned registration",
)
async def create_registration(
    body: RegistrationCreate,
    db: AsyncSession = Depends(get_db),
) -> Registration:
    """Raises 404 for an unknown facility and 409 if the mat is already taken that day."""
    await get_or_404(db, Facility, body.facility_id)
    if await find_registered_mats(db, body.facility_id, body.registration_date, [body.mat_number]):
        raise _slot_taken(body.registration_date, body.mat_number)

    registration = Registration(
        facility_id=body.facility_id,
        registration_date=body.registration_date,
        mat_number=body.mat_number,
        features=feature_values(body.features),
    )
    db.add(registration)
    await flush_or_409(db, f"Mat {body.mat_number} is already registered on {body.registration_date.isoformat()}")
    await db.refresh(registration)
    return registration


@router.get(
    "",
    response_model=list[RegistrationResponse],
    summary="List all registrations",
)
async def list_registrations(db: AsyncSession = Depends(get_db)) -> list[Registration]:
    result = await db.execute(
        select(Registration).order_by(
            Registration.facility_id,
            Registration.registration_date,
            Registration.mat_number,
        )
    )
    return list(result.scalars().all())


@router.get(
    "/{registration_id}",
    response_model=RegistrationResponse,
    summary="Get registration details",
)
async def get_registration(
    registration_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Registration:
    return await get_or_404(db, Registration, registration_id)


@router.put(
    "/{registration_id}",
    response_model=RegistrationResponse,
    summary="Update a registration",
)
async def update_registration(
    registration_id: uuid.UUID,
    body: RegistrationUpdate,
    db: AsyncSession = Depends(get_db),
) -> Registration:
    """Partially update a registration.

    Moving it to another date or mat re-checks that the slot is free.
    Payment, times and comments can only be set while a guest is assigned.
    """
    registration = await get_or_404(db, Registration, registration_id)

    update_data = body.model_dump(exclude_unset=True)
    check_version(registration, update_data.pop("version", None))

    if not registration.assigned:
        stray = [f for f in ASSIGNMENT_FIELDS if update_data.get(f) is not None]
        if stray:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=(
                    f"Mat {registration.mat_number} is unassigned; "
                    f"assign a guest before setting {', '.join(stray)}"
                ),
            )

    registration_date = update_data.get("registration_date", registration.registration_date)
    mat_number = update_data.get("mat_number", registration.mat_number)
    if (registration_date, mat_number) != (registration.registration_date, registration.mat_number):
        if await find_registered_mats(db, registration.facility_id, registration_date, [mat_number]):
            raise _slot_taken(registration_date, mat_number)

    if "features" in update_data:
        update_data["features"] = feature_values(update_data["features"])

    for field, value in update_data.items():
        setattr(registration, field, value)

    db.add(registration)
    await flush_or_409(db, f"Mat {mat_number} is already registered on {registration_date.isoformat()}")
    await db.refresh(registration)
    return registration


@router.delete(
    "/{registration_id}",
    response_model=MessageResponse,
    summary="Delete a registration",
)
async def delete_registration(
    registration_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> dict:
    registration = await get_or_404(db, Registration, registration_id)
    await db.delete(registration)
    await db.flush()
    return {"message": "Registration deleted"}


# ---------------------------------------------------------------------------
# Assignment
# ---------------------------------------------------------------------------


@router.post(
    "/{registration_id}/assign",
    response_model=RegistrationResponse,
    summary="Assign a guest to a registration",
)
async def assign_registration(
    registration_id: uuid.UUID,
    body: Assign,
    db: AsyncSession = Depends(get_db),
) -> Registration:
    """Put a guest on an unassigned mat.

    Raises 404 for an unknown registration or guest, 400 if the guest
    belongs to another facility or is banned on the registration date, and
    409 if the mat already has a guest.
    """
    registration = await get_or_404(db, Registration, registration_id)
    guest = await get_or_404(db, Guest, body.guest_id)

    if guest.facility_id != registration.facility_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Guest belongs to a different facility",
        )
    if registration.assigned:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Mat {registration.mat_number} is already assigned",
        )
    ban = next((b for b in guest.bans if b.covers(registration.registration_date)), None)
    if ban is not None:
        logger.info(
            "Refused assignment of banned guest %s to mat %d on %s",
            guest.id,
            registration.mat_number,
            registration.registration_date,
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=(
                f"Guest '{guest.first_name} {guest.last_name}' is banned "
                f"from {ban.ban_from.isoformat()} to {ban.ban_to.isoformat()}"
            ),
        )

    for field, value in body.model_dump().items():
        setattr(registration, field, value)

    db.add(registration)
    await flush_or_409(db, "Registration was modified by someone else")
    await db.refresh(registration)
    return registration


@router.post(
    "/{registration_id}/deassign",
    response_model=RegistrationResponse,
    summary="Remove the guest from a registration",
)
async def deassign_registration(
    registration_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Registration:
    """Clear every assignment field; the mat's features are kept."""
    registration = await get_or_404(db, Registration, registration_id)
    registration.clear_assignment()

    db.add(registration)
    await flush_or_409(db, "Registration was modified by someone else")
    await db.refresh(registration)
    return registration
