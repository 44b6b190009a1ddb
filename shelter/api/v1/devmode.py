"""DevMode API router. Resets the database to a known fixture.

Used by integration tests of the client layer. Both endpoints are refused
with 403 when ``DEVMODE_ENABLED`` is false.
"""

import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from shelter.api.deps import get_db, require_devmode
from shelter.services.population import depopulate, populate

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/v1/devmode",
    tags=["devmode"],
    dependencies=[Depends(require_devmode)],
)


@router.post(
    "/populate",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Wipe the database and load the fixture data",
)
async def populate_database(db: AsyncSession = Depends(get_db)) -> Response:
    await depopulate(db)
    await populate(db)
    logger.info("DevMode populate completed")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/depopulate",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete every row of every table",
)
async def depopulate_database(db: AsyncSession = Depends(get_db)) -> Response:
    await depopulate(db)
    logger.info("DevMode depopulate completed")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
