"""Tagged temporal and spatial flux profiles.

Each profile is a frozen dataclass; :func:`flux_at_time` and
:func:`flux_at_radius` dispatch over the closed set of variants and reject
anything else with :class:`UnsupportedProfileError`. Both accept a scalar or
a numpy array and return the same shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Union

import numpy as np

from isoforge.errors import (
    InvalidParameterError,
    UnsupportedProfileError,
    require_fraction,
    require_non_negative,
    require_positive,
)

ArrayLike = Union[float, np.ndarray]


# =============================================================================
# Temporal profiles
# =============================================================================


@dataclass(frozen=True)
class ConstantFlux:
    phi0: float

    def __post_init__(self) -> None:
        require_non_negative(phi0=self.phi0)


@dataclass(frozen=True)
class DutyCycleFlux:
    """Pulsed beam: φ₀ during the first ``duty_fraction`` of every period, else 0."""

    phi0: float
    period: float
    duty_fraction: float = 0.5

    def __post_init__(self) -> None:
        require_non_negative(phi0=self.phi0)
        require_positive(period=self.period)
        require_fraction(duty_fraction=self.duty_fraction)


@dataclass(frozen=True)
class RampFlux:
    """Linear ramp from φ₀ to φ₁ over ``t_ramp`` seconds, then flat at φ₁."""

    phi0: float
    phi1: float
    t_ramp: float

    def __post_init__(self) -> None:
        require_non_negative(phi0=self.phi0, phi1=self.phi1)
        require_positive(t_ramp=self.t_ramp)


@dataclass(frozen=True)
class StepFlux:
    """φ₀ before ``t_step``, φ₁ from ``t_step`` on."""

    phi0: float
    phi1: float
    t_step: float

    def __post_init__(self) -> None:
        require_non_negative(phi0=self.phi0, phi1=self.phi1, t_step=self.t_step)


TemporalProfile = Union[ConstantFlux, DutyCycleFlux, RampFlux, StepFlux]


def flux_at_time(profile: TemporalProfile, t: ArrayLike) -> ArrayLike:
    """Flux (cm⁻² s⁻¹) of a temporal profile at time t ≥ 0."""
    times = np.asarray(t, dtype=float)
    if np.any(np.isnan(times)) or np.any(times < 0):
        raise InvalidParameterError("Time must be non-negative")

    if isinstance(profile, ConstantFlux):
        values = np.full_like(times, profile.phi0)
    elif isinstance(profile, DutyCycleFlux):
        phase = np.mod(times, profile.period) / profile.period
        values = np.where(phase < profile.duty_fraction, profile.phi0, 0.0)
    elif isinstance(profile, RampFlux):
        ramp = profile.phi0 + (profile.phi1 - profile.phi0) * (times / profile.t_ramp)
        values = np.where(times <= profile.t_ramp, ramp, profile.phi1)
    elif isinstance(profile, StepFlux):
        values = np.where(times < profile.t_step, profile.phi0, profile.phi1)
    else:
        raise UnsupportedProfileError(f"Unknown flux profile type: {type(profile).__name__}")

    if np.ndim(t) == 0:
        return float(values)
    return values


# =============================================================================
# Spatial profiles
# =============================================================================


@dataclass(frozen=True)
class UniformProfile:
    phi0: float

    def __post_init__(self) -> None:
        require_non_negative(phi0=self.phi0)


@dataclass(frozen=True)
class GaussianProfile:
    """φ(r) = φ_c exp(−r² / 2σ²)."""

    phi_center: float
    sigma: float

    def __post_init__(self) -> None:
        require_non_negative(phi_center=self.phi_center)
        require_positive(sigma=self.sigma)


@dataclass(frozen=True)
class InverseSquareProfile:
    """Flat at φ_c inside r₀, falling as φ_c (r₀/r)² outside."""

    phi_center: float
    r0: float

    def __post_init__(self) -> None:
        require_non_negative(phi_center=self.phi_center)
        require_positive(r0=self.r0)


SpatialProfile = Union[UniformProfile, GaussianProfile, InverseSquareProfile]


def flux_at_radius(profile: SpatialProfile, r: ArrayLike) -> ArrayLike:
    """Flux (cm⁻² s⁻¹) of a spatial profile at radius r ≥ 0 (cm)."""
    radii = np.asarray(r, dtype=float)
    if np.any(np.isnan(radii)) or np.any(radii < 0):
        raise InvalidParameterError("Radius must be non-negative")

    if isinstance(profile, UniformProfile):
        values = np.full_like(radii, profile.phi0)
    elif isinstance(profile, GaussianProfile):
        values = profile.phi_center * np.exp(-(radii**2) / (2.0 * profile.sigma**2))
    elif isinstance(profile, InverseSquareProfile):
        safe = np.maximum(radii, profile.r0)
        values = np.where(radii < profile.r0, profile.phi_center, profile.phi_center * profile.r0**2 / safe**2)
    else:
        raise UnsupportedProfileError(f"Unknown spatial flux profile type: {type(profile).__name__}")

    if np.ndim(r) == 0:
        return float(values)
    return values


# =============================================================================
# Tagged-record parsing
# =============================================================================

_TEMPORAL = {
    "constant": ConstantFlux,
    "duty_cycle": DutyCycleFlux,
    "ramp": RampFlux,
    "step": StepFlux,
}

_SPATIAL = {
    "uniform": UniformProfile,
    "gaussian": GaussianProfile,
    "inverse_square": InverseSquareProfile,
}


def _from_record(record: Mapping[str, Any], table: Mapping[str, type], kind: str):
    params = dict(record)
    tag = params.pop("type", None)
    try:
        cls = table[tag]
    except KeyError:
        raise UnsupportedProfileError(
            f"Unknown {kind} flux profile type: {tag!r} (expected one of {sorted(table)})"
        ) from None
    try:
        return cls(**{k: float(v) for k, v in params.items()})
    except TypeError as exc:
        raise InvalidParameterError(f"Bad parameters for {tag} profile: {exc}") from exc


def temporal_profile_from_dict(record: Mapping[str, Any]) -> TemporalProfile:
    """Parse ``{"type": "duty_cycle", "phi0": ..., "period": ..., ...}``."""
    return _from_record(record, _TEMPORAL, "temporal")


def spatial_profile_from_dict(record: Mapping[str, Any]) -> SpatialProfile:
    return _from_record(record, _SPATIAL, "spatial")


__all__ = [
    "ConstantFlux",
    "DutyCycleFlux",
    "RampFlux",
    "StepFlux",
    "TemporalProfile",
    "flux_at_time",
    "UniformProfile",
    "GaussianProfile",
    "InverseSquareProfile",
    "SpatialProfile",
    "flux_at_radius",
    "temporal_profile_from_dict",
    "spatial_profile_from_dict",
]
