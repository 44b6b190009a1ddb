"""Shared API dependencies, imported by every router.

Re-exports the database session dependency and holds the small lookups
every router needs, so that router modules can import everything from one
place::

    from shelter.api.deps import get_db, get_or_404
"""

import uuid
from typing import TypeVar

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from shelter.config import settings
from shelter.database import Base, get_db

ModelT = TypeVar("ModelT", bound=Base)


async def get_or_404(db: AsyncSession, model: type[ModelT], item_id: uuid.UUID) -> ModelT:
    """Fetch a row by primary key or raise ``HTTPException 404``."""
    item = await db.get(model, item_id)
    if item is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{model.__name__} not found",
        )
    return item


def check_version(item, expected: int | None) -> None:
    """Raise 409 if the caller edited a stale copy of ``item``."""
    if expected is not None and expected != item.version:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"{type(item).__name__} was modified by someone else (version {item.version}, got {expected})",
        )


async def flush_or_409(db: AsyncSession, detail: str) -> None:
    """Flush pending changes, turning constraint and version races into 409s.

    The pre-checks in the routers give friendly messages; the database
    constraints are what actually hold under concurrent writers.
    """
    try:
        await db.flush()
    except IntegrityError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=detail) from exc
    except StaleDataError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Record was modified by someone else",
        ) from exc


async def require_devmode() -> None:
    """Raise 403 unless populate/depopulate are enabled for this deployment."""
    if not settings.devmode_enabled:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="DevMode is disabled",
        )


__all__ = [
    "get_db",
    "get_or_404",
    "check_version",
    "flush_or_409",
    "require_devmode",
]
