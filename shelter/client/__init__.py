"""Async HTTP client for the shelter API."""

from shelter.client.ban import BanClient
from shelter.client.base import AbstractClient, ResourceClient, connect
from shelter.client.devmode import DevModeClient
from shelter.client.facility import FacilityClient
from shelter.client.guest import GuestClient
from shelter.client.registration import RegistrationClient
from shelter.client.template import TemplateClient

__all__ = [
    "AbstractClient",
    "BanClient",
    "DevModeClient",
    "FacilityClient",
    "GuestClient",
    "RegistrationClient",
    "ResourceClient",
    "TemplateClient",
    "connect",
]
