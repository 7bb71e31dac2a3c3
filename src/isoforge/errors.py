"""Error taxonomy and warning category for the production-physics core.

Every error derives from ``ValueError`` so that callers catching the
generic validation failure keep working. Non-fatal approximations are
reported through :class:`PhysicsWarning` on the ``warnings`` channel.
"""

from __future__ import annotations

import math
from typing import Iterable


class IsoForgeError(ValueError):
    """Base class for all IsoForge validation failures."""


class InvalidParameterError(IsoForgeError):
    """A physical quantity is negative, non-positive or outside its range."""


class UnsupportedProfileError(IsoForgeError):
    """An unrecognised flux-profile or geometry tag was supplied."""


class UnsupportedGeometryError(IsoForgeError):
    """A known but non-circular geometry reached the spatial integrator."""


class MissingDataError(IsoForgeError):
    """A route lacks nuclear data required for its reaction type."""


class PhysicsWarning(UserWarning):
    """Planning-grade approximation that leaves the result usable."""


def require_non_negative(**values: float) -> None:
    """Raise :class:`InvalidParameterError` if any value is negative or NaN."""
    for name, value in values.items():
        if math.isnan(value) or value < 0:
            raise InvalidParameterError(f"{name} must be non-negative, got {value}")


def require_positive(**values: float) -> None:
    """Raise :class:`InvalidParameterError` if any value is <= 0 or NaN."""
    for name, value in values.items():
        if math.isnan(value) or value <= 0:
            raise InvalidParameterError(f"{name} must be positive, got {value}")


def require_fraction(**values: float) -> None:
    """Raise :class:`InvalidParameterError` unless every value lies in [0, 1]."""
    for name, value in values.items():
        if math.isnan(value) or value < 0 or value > 1:
            raise InvalidParameterError(f"{name} must lie in [0, 1], got {value}")


def require_all_non_negative(name: str, values: Iterable[float]) -> None:
    for i, value in enumerate(values):
        if math.isnan(value) or value < 0:
            raise InvalidParameterError(f"{name}[{i}] must be non-negative, got {value}")


__all__ = [
    "IsoForgeError",
    "InvalidParameterError",
    "UnsupportedProfileError",
    "UnsupportedGeometryError",
    "MissingDataError",
    "PhysicsWarning",
    "require_non_negative",
    "require_positive",
    "require_fraction",
    "require_all_non_negative",
]
