"""Uncertainty propagation and budgets."""

from isoforge.uncertainty.budget import (
    UncertaintyBudget,
    UncertaintyCategory,
    UncertaintyComponent,
    create_production_budget,
)
from isoforge.uncertainty.propagation import (
    MonteCarloResult,
    NormalSpec,
    UniformSpec,
    monte_carlo,
    rss,
    specs_from_dict,
)

__all__ = [
    "UncertaintyBudget",
    "UncertaintyCategory",
    "UncertaintyComponent",
    "create_production_budget",
    "MonteCarloResult",
    "NormalSpec",
    "UniformSpec",
    "monte_carlo",
    "rss",
    "specs_from_dict",
]
