"""Base classes for the async HTTP client of the shelter API.

Every resource client wraps one shared ``httpx.AsyncClient``. Failed
responses are mapped back onto the ``shelter.exceptions`` classes so that
callers handle the same errors whether they run in-process or remotely::

    async with connect() as http:
        facilities = FacilityClient(http)
        chester = await facilities.find_by_name_exact("Chester")
"""

import logging
import uuid
from typing import Any, ClassVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, TypeAdapter

from shelter.config import settings
from shelter.exceptions import (
    BadRequest,
    Forbidden,
    InternalServerError,
    NotFound,
    NotUnique,
    ShelterError,
)

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

# Pydantic validation failures (422) are client mistakes too.
_ERRORS: dict[int, type[ShelterError]] = {
    400: BadRequest,
    403: Forbidden,
    404: NotFound,
    409: NotUnique,
    422: BadRequest,
}


def connect(base_url: str | None = None, **kwargs: Any) -> httpx.AsyncClient:
    """Return an ``httpx.AsyncClient`` pointed at the shelter API."""
    return httpx.AsyncClient(
        base_url=base_url or settings.api_base_url,
        timeout=settings.client_timeout_seconds,
        **kwargs,
    )


def _detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and "detail" in body:
        detail = body["detail"]
        return detail if isinstance(detail, str) else str(detail)
    return str(body)


class AbstractClient:
    """Path handling, status checking and error mapping for one resource."""

    path: ClassVar[str] = ""

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    def _url(self, *parts: Any) -> str:
        return API_PREFIX + self.path + "".join(f"/{quote(str(part), safe='')}" for part in parts)

    @staticmethod
    def _payload(body: BaseModel | None) -> Any:
        """Only fields the caller actually set travel, so partial updates stay partial."""
        if body is None:
            return None
        return body.model_dump(mode="json", exclude_unset=True)

    def _check(self, response: httpx.Response, expected: int) -> httpx.Response:
        if response.status_code == expected:
            return response
        error = _ERRORS.get(response.status_code, InternalServerError)
        detail = _detail(response)
        logger.warning(
            "%s %s returned %d: %s",
            response.request.method,
            response.request.url.path,
            response.status_code,
            detail,
        )
        raise error(detail)

    async def _get(self, *parts: Any) -> Any:
        response = await self.http.get(self._url(*parts))
        return self._check(response, 200).json()

    async def _post(self, *parts: Any, body: Any = None, expected: int = 201) -> Any:
        response = await self.http.post(self._url(*parts), json=body)
        self._check(response, expected)
        return response.json() if response.content else None

    async def _put(self, *parts: Any, body: Any = None) -> Any:
        response = await self.http.put(self._url(*parts), json=body)
        return self._check(response, 200).json()

    async def _delete(self, *parts: Any) -> Any:
        response = await self.http.delete(self._url(*parts))
        return self._check(response, 200).json()


class ResourceClient(AbstractClient):
    """Adds the CRUD calls every stored resource supports."""

    response_model: ClassVar[type[BaseModel]]

    def _one(self, data: Any) -> Any:
        return self.response_model.model_validate(data)

    def _many(self, data: Any) -> list[Any]:
        return TypeAdapter(list[self.response_model]).validate_python(data)

    async def find(self, item_id: uuid.UUID) -> Any:
        return self._one(await self._get(item_id))

    async def find_all(self) -> list[Any]:
        return self._many(await self._get())

    async def insert(self, body: BaseModel) -> Any:
        return self._one(await self._post(body=self._payload(body)))

    async def update(self, item_id: uuid.UUID, body: BaseModel) -> Any:
        return self._one(await self._put(item_id, body=self._payload(body)))

    async def delete(self, item_id: uuid.UUID) -> str:
        """Delete the item and return the server's confirmation message."""
        return (await self._delete(item_id))["message"]
