"""SQLAlchemy models for the shelter service.

All models are imported here so that ``Base.metadata.create_all`` can
discover them. If you add a new model, import it in this file.
"""

from shelter.models.ban import Ban
from shelter.models.facility import Facility
from shelter.models.guest import Guest
from shelter.models.registration import Registration
from shelter.models.template import Template

__all__ = [
    "Ban",
    "Facility",
    "Guest",
    "Registration",
    "Template",
]
