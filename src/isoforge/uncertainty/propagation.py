"""Parametric uncertainty propagation around a deterministic kernel.

Only the kernel's input parameters are sampled; the kernel itself must be
a deterministic, side-effect-free function of a parameter mapping. All
randomness comes from one injectable generator, a zero-argument callable
returning a uniform float in [0, 1).
"""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional, Sequence, Union

import numpy as np

from isoforge.errors import InvalidParameterError, require_all_non_negative

logger = logging.getLogger(__name__)

PERCENTILES = {"p5": 0.05, "p25": 0.25, "p50": 0.50, "p75": 0.75, "p95": 0.95}


def rss(uncertainties: Sequence[float]) -> float:
    """Root-sum-square combination of independent uncertainties, √(Σ σᵢ²).

    Raises
    ------
    InvalidParameterError
        On an empty sequence or a negative entry.
    """
    values = [float(u) for u in uncertainties]
    if not values:
        raise InvalidParameterError("rss requires at least one uncertainty")
    require_all_non_negative("uncertainties", values)
    return math.sqrt(sum(u * u for u in values))


@dataclass(frozen=True)
class NormalSpec:
    """Normal distribution; ``mean`` defaults to the nominal parameter value."""

    std: float
    mean: Optional[float] = None

    def __post_init__(self) -> None:
        if math.isnan(self.std) or self.std < 0:
            raise InvalidParameterError(f"std must be non-negative, got {self.std}")

    def sample(self, nominal: float, rng: Callable[[], float]) -> float:
        # Box-Muller; log(u1) needs u1 > 0
        u1 = rng()
        while u1 == 0.0:
            u1 = rng()
        u2 = rng()
        z = math.sqrt(-2.0 * math.log(u1)) * math.cos(2.0 * math.pi * u2)
        centre = nominal if self.mean is None else self.mean
        return centre + z * self.std


@dataclass(frozen=True)
class UniformSpec:
    """Uniform distribution over [low, high]."""

    low: float
    high: float

    def __post_init__(self) -> None:
        if not self.low <= self.high:
            raise InvalidParameterError(f"Uniform range must satisfy low <= high, got [{self.low}, {self.high}]")

    def sample(self, nominal: float, rng: Callable[[], float]) -> float:
        return self.low + rng() * (self.high - self.low)


UncertaintySpec = Union[NormalSpec, UniformSpec]


@dataclass
class MonteCarloResult:
    """Monte Carlo output statistics.

    Attributes
    ----------
    mean : float
        Sample mean
    std : float
        Population standard deviation
    samples : ndarray
        Kernel outputs in sampling order
    percentiles : dict
        Nearest-rank percentiles ``p5``, ``p25``, ``p50``, ``p75``, ``p95``
    """

    mean: float
    std: float
    samples: np.ndarray
    percentiles: Dict[str, float]

    @property
    def relative_std(self) -> float:
        return self.std / abs(self.mean) if self.mean != 0 else 0.0

    def to_dict(self, include_samples: bool = False) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "mean": self.mean,
            "std": self.std,
            "n_samples": int(self.samples.size),
            "percentiles": dict(self.percentiles),
        }
        if include_samples:
            data["samples"] = self.samples.tolist()
        return data


def nearest_rank_percentiles(samples: Sequence[float]) -> Dict[str, float]:
    """``sorted[floor(n q)]`` for q in 5, 25, 50, 75 and 95 %."""
    ordered = np.sort(np.asarray(samples, dtype=float))
    n = ordered.size
    return {key: float(ordered[int(math.floor(n * q))]) for key, q in PERCENTILES.items()}


def monte_carlo(
    kernel: Callable[[Dict[str, float]], float],
    nominal: Mapping[str, float],
    specs: Mapping[str, UncertaintySpec],
    n_samples: int,
    rng: Optional[Callable[[], float]] = None,
) -> MonteCarloResult:
    """
    Propagate input uncertainties through a deterministic kernel.

    Parameters
    ----------
    kernel : callable
        Pure function of a parameter dict returning a scalar
    nominal : mapping
        Nominal value of every kernel parameter
    specs : mapping
        Distribution per parameter; parameters without a spec stay nominal
    n_samples : int
        Number of draws, positive
    rng : callable, optional
        Uniform [0, 1) generator; defaults to :func:`random.random`

    Returns
    -------
    MonteCarloResult
    """
    if n_samples <= 0:
        raise InvalidParameterError(f"Number of samples must be positive, got {n_samples}")
    unknown = sorted(set(specs) - set(nominal))
    if unknown:
        logger.warning("Uncertainty specs for parameters without nominal values ignored: %s", ", ".join(unknown))

    draw = rng or random.random
    outputs = np.empty(n_samples, dtype=float)
    for i in range(n_samples):
        params = {
            name: specs[name].sample(value, draw) if name in specs else value
            for name, value in nominal.items()
        }
        outputs[i] = float(kernel(params))

    logger.debug("Monte Carlo: %d samples over %d uncertain parameters", n_samples, len(specs))
    return MonteCarloResult(
        mean=float(np.mean(outputs)),
        std=float(np.std(outputs)),
        samples=outputs,
        percentiles=nearest_rank_percentiles(outputs),
    )


def spec_from_dict(record: Mapping[str, Any]) -> UncertaintySpec:
    """Parse ``{"type": "normal", "std": ...}`` or ``{"type": "uniform", "range": [lo, hi]}``."""
    kind = record.get("type")
    if kind == "normal":
        mean = record.get("mean")
        return NormalSpec(std=float(record["std"]), mean=None if mean is None else float(mean))
    if kind == "uniform":
        if "range" in record:
            low, high = record["range"]
        else:
            low, high = record["low"], record["high"]
        return UniformSpec(float(low), float(high))
    raise InvalidParameterError(f"Unknown uncertainty distribution: {kind!r}")


def specs_from_dict(records: Mapping[str, Mapping[str, Any]]) -> Dict[str, UncertaintySpec]:
    return {name: spec_from_dict(record) for name, record in records.items()}


__all__ = [
    "rss",
    "NormalSpec",
    "UniformSpec",
    "UncertaintySpec",
    "MonteCarloResult",
    "nearest_rank_percentiles",
    "monte_carlo",
    "spec_from_dict",
    "specs_from_dict",
]
