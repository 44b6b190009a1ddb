"""Bans CRUD API router."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shelter.api.deps import check_version, flush_or_409, get_db, get_or_404
from shelter.models.ban import Ban
from shelter.models.guest import Guest
from shelter.schemas.ban import BanCreate, BanResponse, BanUpdate
from shelter.schemas.common import MessageResponse

router = APIRouter(prefix="/api/v1/bans", tags=["bans"])


@router.post(
    "",
    response_model=BanResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Ban a guest for a date range",
)
async def create_ban(
    body: BanCreate,
    db: AsyncSession = Depends(get_db),
) -> Ban:
    await get_or_404(db, Guest, body.guest_id)

    ban = Ban(**body.model_dump())
    db.add(ban)
    await flush_or_409(db, "Ban could not be stored")
    await db.refresh(ban)
    return ban


@router.get(
    "",
    response_model=list[BanResponse],
    summary="List all bans",
)
async def list_bans(db: AsyncSession = Depends(get_db)) -> list[Ban]:
    result = await db.execute(select(Ban).order_by(Ban.guest_id, Ban.ban_from))
    return list(result.scalars().all())


@router.get(
    "/{ban_id}",
    response_model=BanResponse,
    summary="Get ban details",
)
async def get_ban(
    ban_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Ban:
    return await get_or_404(db, Ban, ban_id)


@router.put(
    "/{ban_id}",
    response_model=BanResponse,
    summary="Update a ban",
)
async def update_ban(
    ban_id: uuid.UUID,
    body: BanUpdate,
    db: AsyncSession = Depends(get_db),
) -> Ban:
    """Partially update a ban. The resulting range must still be ordered."""
    ban = await get_or_404(db, Ban, ban_id)

    update_data = body.model_dump(exclude_unset=True)
    check_version(ban, update_data.pop("version", None))

    ban_from = update_data.get("ban_from", ban.ban_from)
    ban_to = update_data.get("ban_to", ban.ban_to)
    if ban_to < ban_from:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="ban_to must not be before ban_from",
        )

    for field, value in update_data.items():
        setattr(ban, field, value)

    db.add(ban)
    await flush_or_409(db, "Ban could not be stored")
    await db.refresh(ban)
    return ban


@router.delete(
    "/{ban_id}",
    response_model=MessageResponse,
    summary="Delete a ban",
)
async def delete_ban(
    ban_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> dict:
    ban = await get_or_404(db, Ban, ban_id)
    await db.delete(ban)
    await db.flush()
    return {"message": "Ban deleted"}
