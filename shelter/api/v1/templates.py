"""Templates CRUD API router, plus generation of a day's registrations."""

import uuid
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shelter.api.deps import check_version, flush_or_409, get_db, get_or_404
from shelter.models.facility import Facility
from shelter.models.template import Template
from shelter.models.types import feature_values
from shelter.schemas.common import MessageResponse
from shelter.schemas.registration import RegistrationResponse
from shelter.schemas.template import TemplateCreate, TemplateResponse, TemplateUpdate
from shelter.services.mats import parse_mats
from shelter.services.template_generator import generate_registrations

router = APIRouter(prefix="/api/v1/templates", tags=["templates"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _stored_features(features: dict[int, list[str]] | None) -> dict[str, list[str]] | None:
    """JSON objects only have string keys; normalize codes on the way in."""
    if features is None:
        return None
    return {str(mat): feature_values(codes) for mat, codes in sorted(features.items())}


def _check_feature_mats(all_mats: str, features: dict | None) -> None:
    mats = set(parse_mats(all_mats))
    outside = sorted(int(mat) for mat in (features or {}) if int(mat) not in mats)
    if outside:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Feature mats {outside} are not in all_mats '{all_mats}'",
        )


async def _check_name_unique(
    db: AsyncSession,
    facility_id: uuid.UUID,
    name: str,
    exclude_template_id: uuid.UUID | None = None,
) -> None:
    query = select(Template).where(Template.facility_id == facility_id, Template.name == name)
    if exclude_template_id is not None:
        query = query.where(Template.id != exclude_template_id)
    result = await db.execute(query)
    if result.scalar_one_or_none() is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Template name '{name}' is already in use in this facility",
        )


# ---------------------------------------------------------------------------
# CRUD
# ---------------------------------------------------------------------------


@router.post(
    "",
    response_model=TemplateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new template",
)
async def create_template(
    body: TemplateCreate,
    db: AsyncSession = Depends(get_db),
) -> Template:
    await get_or_404(db, Facility, body.facility_id)
    await _check_name_unique(db, body.facility_id, body.name)

    template = Template(
        facility_id=body.facility_id,
        name=body.name,
        all_mats=body.all_mats,
        features=_stored_features(body.features),
        comments=body.comments,
    )
    db.add(template)
    await flush_or_409(db, f"Template name '{body.name}' is already in use in this facility")
    await db.refresh(template)
    return template


@router.get(
    "",
    response_model=list[TemplateResponse],
    summary="List all templates",
)
async def list_templates(db: AsyncSession = Depends(get_db)) -> list[Template]:
    result = await db.execute(select(Template).order_by(Template.name))
    return list(result.scalars().all())


@router.get(
    "/{template_id}",
    response_model=TemplateResponse,
    summary="Get template details",
)
async def get_template(
    template_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> Template:
    return await get_or_404(db, Template, template_id)


@router.put(
    "/{template_id}",
    response_model=TemplateResponse,
    summary="Update a template",
)
async def update_template(
    template_id: uuid.UUID,
    body: TemplateUpdate,
    db: AsyncSession = Depends(get_db),
) -> Template:
    """Partially update a template.

    When only one of ``all_mats`` and ``features`` is supplied, it is
    checked against the stored value of the other.
    """
    template = await get_or_404(db, Template, template_id)

    update_data = body.model_dump(exclude_unset=True)
    check_version(template, update_data.pop("version", None))

    if "features" in update_data:
        update_data["features"] = _stored_features(update_data["features"])
    if "all_mats" in update_data or "features" in update_data:
        _check_feature_mats(
            update_data.get("all_mats", template.all_mats),
            update_data.get("features", template.features),
        )

    if "name" in update_data and update_data["name"] != template.name:
        await _check_name_unique(db, template.facility_id, update_data["name"], exclude_template_id=template_id)

    for field, value in update_data.items():
        setattr(template, field, value)

    db.add(template)
    await flush_or_409(db, f"Template name '{template.name}' is already in use in this facility")
    await db.refresh(template)
    return template


@router.delete(
    "/{template_id}",
    response_model=MessageResponse,
    summary="Delete a template",
)
async def delete_template(
    template_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Registrations generated from the template are not affected."""
    template = await get_or_404(db, Template, template_id)
    await db.delete(template)
    await db.flush()
    return {"message": "Template deleted"}


# ---------------------------------------------------------------------------
# Generation
# ---------------------------------------------------------------------------


@router.post(
    "/{template_id}/generate/{registration_date}",
    response_model=list[RegistrationResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Generate a day's unassigned registrations from a template",
)
async def generate_template_registrations(
    template_id: uuid.UUID,
    registration_date: date,
    db: AsyncSession = Depends(get_db),
) -> list:
    """One registration per template mat, ascending. Raises 409 if any mat is
    already registered that day.
    """
    return await generate_registrations(db, template_id, registration_date)
