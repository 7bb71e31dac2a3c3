"""Uncertainty budget for production estimates.

Decomposes the uncertainty of a planned quantity (EOB activity, delivered
activity) into independent sources and combines them by root-sum-square.

Uncertainty Categories:
1. Flux (magnitude and spectrum at the target)
2. Cross-section (planning-grade nuclear data)
3. Half-life
4. Target mass and enrichment
5. Self-shielding
6. Geometry (source-target distance, beam spot)
7. Chemistry yield
8. Timing (irradiation, processing, transport)

References:
    GUM (Guide to the Expression of Uncertainty in Measurement)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from isoforge.errors import InvalidParameterError, require_non_negative
from isoforge.uncertainty.propagation import rss


class UncertaintyCategory(Enum):
    """Uncertainty sources for a production estimate."""

    FLUX = "flux"
    CROSS_SECTION = "cross_section"
    HALF_LIFE = "half_life"
    TARGET_MASS = "target_mass"
    SELF_SHIELDING = "self_shielding"
    GEOMETRY = "geometry"
    CHEMISTRY_YIELD = "chemistry_yield"
    TIMING = "timing"
    OTHER = "other"


@dataclass
class UncertaintyComponent:
    """Single uncertainty component.

    Attributes
    ----------
    category : UncertaintyCategory
        Type of uncertainty source
    value : float
        Absolute uncertainty (same units as the estimate)
    relative : float
        Relative uncertainty (fractional, not percent)
    description : str
        Human-readable description
    """

    category: UncertaintyCategory
    value: float
    relative: float = 0.0
    description: str = ""

    def __post_init__(self) -> None:
        require_non_negative(uncertainty=self.value, relative_uncertainty=self.relative)

    @classmethod
    def from_relative(
        cls,
        category: UncertaintyCategory,
        relative: float,
        estimate: float,
        description: str = "",
    ) -> UncertaintyComponent:
        return cls(
            category=category,
            value=relative * abs(estimate),
            relative=relative,
            description=description,
        )

    @classmethod
    def from_absolute(
        cls,
        category: UncertaintyCategory,
        value: float,
        estimate: float,
        description: str = "",
    ) -> UncertaintyComponent:
        relative = value / abs(estimate) if estimate != 0 else 0.0
        return cls(
            category=category,
            value=value,
            relative=relative,
            description=description,
        )


@dataclass
class UncertaintyBudget:
    """Uncertainty budget with component breakdown.

    Attributes
    ----------
    estimate : float
        Central value of the planned quantity
    components : list[UncertaintyComponent]
        Independent uncertainty sources
    coverage_factor : float
        Coverage factor k for the expanded uncertainty
    units : str
        Units of the estimate
    name : str
        Identifier for this budget
    """

    estimate: float
    components: List[UncertaintyComponent] = field(default_factory=list)
    coverage_factor: float = 1.0
    units: str = ""
    name: str = ""

    def add_component(self, component: UncertaintyComponent) -> None:
        self.components.append(component)

    def add_relative(
        self,
        category: UncertaintyCategory,
        relative: float,
        description: str = "",
    ) -> None:
        """Add a component given as a fraction of the estimate."""
        self.components.append(
            UncertaintyComponent.from_relative(category, relative, self.estimate, description)
        )

    def add_absolute(
        self,
        category: UncertaintyCategory,
        value: float,
        description: str = "",
    ) -> None:
        """Add a component given in the units of the estimate."""
        self.components.append(
            UncertaintyComponent.from_absolute(category, value, self.estimate, description)
        )

    @property
    def total_uncertainty(self) -> float:
        """Combined standard uncertainty (RSS of all components); 0 when empty."""
        if not self.components:
            return 0.0
        return rss([c.value for c in self.components])

    @property
    def relative_total(self) -> float:
        if self.estimate == 0:
            return 0.0
        return self.total_uncertainty / abs(self.estimate)

    @property
    def expanded_uncertainty(self) -> float:
        """Expanded uncertainty (k × standard uncertainty)."""
        return self.coverage_factor * self.total_uncertainty

    def dominant_component(self) -> Optional[UncertaintyComponent]:
        """Get the largest uncertainty component."""
        if not self.components:
            return None
        return max(self.components, key=lambda c: c.value)

    def fraction_by_category(self, category: UncertaintyCategory) -> float:
        """Fraction of the total variance contributed by ``category`` (0-1)."""
        total_var = self.total_uncertainty**2
        if total_var == 0:
            return 0.0
        category_var = sum(c.value**2 for c in self.components if c.category == category)
        return category_var / total_var

    def by_category(self) -> Dict[UncertaintyCategory, float]:
        """RSS of the components in each category."""
        grouped: Dict[UncertaintyCategory, List[float]] = {}
        for c in self.components:
            grouped.setdefault(c.category, []).append(c.value)
        return {category: rss(values) for category, values in grouped.items()}

    def summary_table(self) -> str:
        """Generate text summary table."""
        total = self.total_uncertainty
        lines = [
            f"Uncertainty Budget: {self.name}",
            f"Estimate: {self.estimate:.6g} {self.units}",
            f"Total Uncertainty: ±{total:.6g} ({100 * self.relative_total:.2f}%)",
            "",
            "Component Breakdown:",
            "-" * 70,
            f"{'Category':<25} {'Absolute':>12} {'Relative':>10} {'Variance %':>10}",
            "-" * 70,
        ]

        total_var = total**2
        for c in sorted(self.components, key=lambda x: -x.value**2):
            var_frac = (c.value**2 / total_var * 100) if total_var > 0 else 0.0
            lines.append(
                f"{c.category.value:<25} {c.value:>12.4g} {100 * c.relative:>9.2f}% {var_frac:>9.1f}%"
            )

        lines.append("-" * 70)
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        total_var = self.total_uncertainty**2
        return {
            "estimate": self.estimate,
            "total_uncertainty": self.total_uncertainty,
            "relative_total": self.relative_total,
            "units": self.units,
            "name": self.name,
            "coverage_factor": self.coverage_factor,
            "components": [
                {
                    "category": c.category.value,
                    "value": c.value,
                    "relative": c.relative,
                    "description": c.description,
                    "variance_fraction": c.value**2 / total_var if total_var > 0 else 0.0,
                }
                for c in self.components
            ],
        }


def create_production_budget(
    activity: float,
    flux_rel: float = 0.10,
    cross_section_rel: float = 0.20,
    half_life_rel: float = 0.01,
    target_mass_rel: float = 0.01,
    self_shielding_rel: float = 0.05,
    geometry_rel: float = 0.05,
    chemistry_yield_rel: float = 0.05,
    timing_rel: float = 0.01,
    units: str = "Bq",
) -> UncertaintyBudget:
    """
    Standard planning budget for a produced activity.

    Parameters
    ----------
    activity : float
        Planned activity
    flux_rel : float
        Flux magnitude uncertainty (default 10%)
    cross_section_rel : float
        Planning cross-section uncertainty (default 20%)
    half_life_rel : float
        Half-life uncertainty (default 1%)
    target_mass_rel : float
        Target mass and enrichment (default 1%)
    self_shielding_rel : float
        Self-shielding factor (default 5%)
    geometry_rel : float
        Source-target geometry (default 5%)
    chemistry_yield_rel : float
        Separation yield (default 5%)
    timing_rel : float
        Irradiation and processing timing (default 1%)
    units : str
        Activity units

    Returns
    -------
    UncertaintyBudget
    """
    if activity < 0:
        raise InvalidParameterError(f"activity must be non-negative, got {activity}")

    budget = UncertaintyBudget(estimate=activity, units=units, name="production")
    budget.add_relative(UncertaintyCategory.FLUX, flux_rel, "Flux at the target")
    budget.add_relative(UncertaintyCategory.CROSS_SECTION, cross_section_rel, "Planning cross-section")
    budget.add_relative(UncertaintyCategory.HALF_LIFE, half_life_rel, "Product half-life")
    budget.add_relative(UncertaintyCategory.TARGET_MASS, target_mass_rel, "Target mass and enrichment")
    budget.add_relative(UncertaintyCategory.SELF_SHIELDING, self_shielding_rel, "Self-shielding factor")
    budget.add_relative(UncertaintyCategory.GEOMETRY, geometry_rel, "Source-target geometry")
    budget.add_relative(UncertaintyCategory.CHEMISTRY_YIELD, chemistry_yield_rel, "Separation yield")
    budget.add_relative(UncertaintyCategory.TIMING, timing_rel, "Irradiation and processing timing")
    return budget


__all__ = [
    "UncertaintyCategory",
    "UncertaintyComponent",
    "UncertaintyBudget",
    "create_production_budget",
]
