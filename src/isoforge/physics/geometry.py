"""Source-target geometry and target self-shielding.

Point isotropic source with solid-angle interception by a circular
target, and the slab self-shielding factor

    G = (1 − exp(−Σ t)) / (Σ t)

for a target of macroscopic cross section Σ and thickness t.
"""

from __future__ import annotations

import logging
import math
import warnings

from isoforge.errors import PhysicsWarning, require_non_negative, require_positive

logger = logging.getLogger(__name__)

# Point-source approximation overestimates flux when d < 3 r
CLOSE_GEOMETRY_RATIO = 3.0


def solid_angle(distance_cm: float, radius_cm: float) -> float:
    """Solid angle Ω = 2π (1 − d / √(d² + r²)) subtended by a disk (sr).

    Returns 0 for the degenerate point-on-point case d = r = 0.
    """
    require_non_negative(distance_cm=distance_cm, radius_cm=radius_cm)
    if distance_cm == 0 and radius_cm == 0:
        return 0.0
    return 2.0 * math.pi * (1.0 - distance_cm / math.sqrt(distance_cm**2 + radius_cm**2))


def geometric_efficiency(omega: float) -> float:
    """Fraction of isotropic emission intercepted, η = Ω / 4π."""
    require_non_negative(solid_angle=omega)
    return omega / (4.0 * math.pi)


def flux_from_solid_angle(
    source_rate: float,
    omega: float,
    target_area_cm2: float,
    distance_cm: float | None = None,
    radius_cm: float | None = None,
) -> float:
    """Flux on a target from a point isotropic source, φ = S Ω / A.

    Ω already carries the geometric interception; the result must not be
    scaled by 4π again. When ``distance_cm`` and ``radius_cm`` are given and
    d < 3 r a :class:`PhysicsWarning` flags the likely 10–50 % overestimate.
    """
    require_non_negative(source_rate=source_rate, solid_angle=omega)
    require_positive(target_area_cm2=target_area_cm2)

    if (
        distance_cm is not None
        and radius_cm is not None
        and distance_cm >= 0
        and radius_cm > 0
        and distance_cm < CLOSE_GEOMETRY_RATIO * radius_cm
    ):
        message = (
            "Target distance < 3x target radius: point-source / solid-angle "
            "approximation may overestimate flux by 10-50%."
        )
        logger.warning(message)
        warnings.warn(message, PhysicsWarning, stacklevel=2)

    return source_rate * omega / target_area_cm2


def flux_finite_source(
    source_rate: float,
    distance_cm: float,
    target_radius_cm: float,
    source_radius_cm: float,
) -> float:
    """Flux on a disk target from a finite disk source.

    Small sources (r_s ≤ 0.1 d) use the point-source solid angle; larger
    sources use the effective distance d_eff = √(d² + r_s²/2).
    """
    require_non_negative(distance_cm=distance_cm, source_radius_cm=source_radius_cm)
    require_positive(target_radius_cm=target_radius_cm)
    if distance_cm == 0:
        return 0.0

    area = math.pi * target_radius_cm**2
    if source_radius_cm <= 0.1 * distance_cm:
        omega = solid_angle(distance_cm, target_radius_cm)
    else:
        d_eff = math.sqrt(distance_cm**2 + 0.5 * source_radius_cm**2)
        omega = solid_angle(d_eff, target_radius_cm)
    return source_rate * omega / area


def self_shielding_factor(sigma_macro: float, thickness_cm: float) -> float:
    """Slab self-shielding factor, exactly 1.0 when Σ = 0 or t = 0."""
    require_non_negative(macroscopic_cross_section=sigma_macro, thickness_cm=thickness_cm)
    if sigma_macro == 0 or thickness_cm == 0:
        return 1.0
    x = sigma_macro * thickness_cm
    return (1.0 - math.exp(-x)) / x


__all__ = [
    "solid_angle",
    "geometric_efficiency",
    "flux_from_solid_angle",
    "flux_finite_source",
    "self_shielding_factor",
]
