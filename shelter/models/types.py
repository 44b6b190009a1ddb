"""Enumerated codes shared by models and schemas."""

from enum import Enum


class FeatureType(str, Enum):
    """Attributes of a mat slot."""

    H = "H"  # handicap accessible
    S = "S"  # shower equipped

    @property
    def description(self) -> str:
        return _FEATURE_DESCRIPTIONS[self]


class PaymentType(str, Enum):
    """How a guest's stay on a mat is funded."""

    CASH = "$$"
    AG = "AG"
    CT = "CT"
    FM = "FM"
    MM = "MM"
    SW = "SW"
    UK = "UK"
    WB = "WB"

    @property
    def description(self) -> str:
        return _PAYMENT_DESCRIPTIONS[self]


_FEATURE_DESCRIPTIONS = {
    FeatureType.H: "Handicap Accessible",
    FeatureType.S: "Shower Equipped",
}

_PAYMENT_DESCRIPTIONS = {
    PaymentType.CASH: "Cash",
    PaymentType.AG: "Agency",
    PaymentType.CT: "CityTeam",
    PaymentType.FM: "Free Mat",
    PaymentType.MM: "Medical Mat",
    PaymentType.SW: "Severe Weather",
    PaymentType.UK: "Unknown",
    PaymentType.WB: "Work Bed",
}


def feature_values(features) -> list[str] | None:
    """Normalize a feature collection for storage: sorted, de-duplicated codes.

    ``None`` stays ``None`` and an empty collection stays empty; the two mean
    different things on a registration.
    """
    if features is None:
        return None
    return sorted({FeatureType(f).value for f in features})
