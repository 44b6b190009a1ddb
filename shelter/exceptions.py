"""Error taxonomy shared by the workflow services and the HTTP client.

Services raise these; ``shelter.main`` renders them as ``{"detail": ...}``
responses with the matching status code, and ``shelter.client`` maps the
status codes of failed responses back onto the same classes.
"""

from __future__ import annotations

from fastapi import status


class ShelterError(Exception):
    """Base exception for shelter workflow errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class BadRequest(ShelterError):
    """A required field is missing or a value is malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class Forbidden(ShelterError):
    """The operation is not permitted in this deployment."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFound(ShelterError):
    """A referenced facility, guest, registration or template does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class NotUnique(ShelterError):
    """Creation would violate a uniqueness constraint.

    Raised for races between concurrent writers too, so callers may treat it
    as retryable.
    """

    status_code = status.HTTP_409_CONFLICT


class InternalServerError(ShelterError):
    """Unexpected failure in the service or its backing store."""

    pass
