"""Production under a time-varying flux.

Generalises the constant-flux activation formula to an arbitrary flux
history by evaluating the convolution

    N(t_irr) = ∫₀^t_irr R(τ) e^(−λ (t_irr − τ)) dτ,   R(τ) = N σ φ(τ) f_shield

with the trapezoidal rule. Nodes sit at 0, dt, 2dt, ... and at t_irr
itself; the last interval is shortened so the integrated span is exactly
t_irr.
"""

from __future__ import annotations

import logging
import math
from typing import Callable, Optional

import numpy as np

from isoforge.config import DEFAULT_INTEGRATION, IntegrationConfig
from isoforge.errors import require_non_negative, require_positive
from isoforge.physics.flux_profiles import TemporalProfile, flux_at_time

logger = logging.getLogger(__name__)


def _step_count(total: float, step: float) -> int:
    n = math.ceil(total / step)
    if n > 1 and (n - 1) * step >= total:
        n -= 1
    return max(n, 1)


def time_grid(t_irr: float, dt: float) -> np.ndarray:
    """Quadrature nodes 0, dt, ..., (n−1)dt, t_irr for a span of ``t_irr`` seconds."""
    require_non_negative(t_irr=t_irr)
    require_positive(dt=dt)
    if t_irr == 0:
        return np.zeros(1)
    steps = _step_count(t_irr, dt)
    nodes = np.arange(steps + 1, dtype=float) * dt
    nodes[-1] = t_irr
    return nodes


def _trapezoid(integrand: Callable[[np.ndarray], np.ndarray], t_irr: float, step: float, chunk: int) -> float:
    """Trapezoidal integral of ``integrand`` over [0, t_irr], evaluated in numpy batches."""
    steps = _step_count(t_irr, step)
    total = 0.0
    prev_tau = 0.0
    prev_f = float(integrand(np.zeros(1))[0])
    chunk = max(int(chunk), 1)
    for start in range(1, steps + 1, chunk):
        stop = min(start + chunk, steps + 1)
        tau = np.arange(start, stop, dtype=float) * step
        if stop == steps + 1:
            tau[-1] = t_irr
        f = integrand(tau)
        nodes = np.concatenate(([prev_tau], tau))
        values = np.concatenate(([prev_f], f))
        total += float(np.sum(0.5 * (values[:-1] + values[1:]) * np.diff(nodes)))
        prev_tau, prev_f = float(tau[-1]), float(f[-1])
    return total


def atoms_at_eob_time_varying(
    n_target: float,
    sigma_cm2: float,
    profile: TemporalProfile,
    f_shield: float,
    decay_const: float,
    t_irr: float,
    dt: Optional[float] = None,
    config: Optional[IntegrationConfig] = None,
) -> float:
    """
    Atoms at EOB for a time-dependent flux by trapezoidal convolution.

    Parameters
    ----------
    n_target : float
        Number of target atoms
    sigma_cm2 : float
        Cross section (cm²)
    profile : TemporalProfile
        Flux history
    f_shield : float
        Self-shielding factor
    decay_const : float
        Product decay constant λ (s⁻¹); 0 for a stable product
    t_irr : float
        Irradiation time (s)
    dt : float, optional
        Step override; default min(t_irr / 1000, 0.1 s)
    config : IntegrationConfig, optional
        Numerical settings

    Returns
    -------
    float
        Product atoms at end of bombardment
    """
    config = config or DEFAULT_INTEGRATION
    require_non_negative(
        n_target=n_target,
        sigma_cm2=sigma_cm2,
        f_shield=f_shield,
        decay_constant=decay_const,
        t_irr=t_irr,
    )
    if t_irr == 0:
        return 0.0

    step = dt if dt is not None else config.default_time_step(t_irr)
    require_positive(dt=step)
    logger.debug(
        "Time-varying quadrature: %d intervals of %.3g s over %.3g s",
        _step_count(t_irr, step),
        step,
        t_irr,
    )

    scale = n_target * sigma_cm2 * f_shield

    def integrand(tau):
        return scale * flux_at_time(profile, tau) * np.exp(-decay_const * (t_irr - tau))

    return _trapezoid(integrand, t_irr, step, config.quadrature_chunk)


def mean_flux(
    profile: TemporalProfile,
    t_irr: float,
    dt: Optional[float] = None,
    config: Optional[IntegrationConfig] = None,
) -> float:
    """Time-averaged flux over [0, t_irr] on the same trapezoidal grid.

    Returns the flux at t = 0 for a zero-length irradiation.
    """
    config = config or DEFAULT_INTEGRATION
    require_non_negative(t_irr=t_irr)
    if t_irr == 0:
        return float(flux_at_time(profile, 0.0))
    step = dt if dt is not None else config.default_time_step(t_irr)
    require_positive(dt=step)
    return _trapezoid(lambda tau: flux_at_time(profile, tau), t_irr, step, config.quadrature_chunk) / t_irr


__all__ = ["time_grid", "atoms_at_eob_time_varying", "mean_flux"]
