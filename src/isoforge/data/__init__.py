"""Reference data: atomic masses and production-route records."""

from isoforge.data.atomic_masses import (
    DEFAULT_REGISTRY,
    FALLBACK_ATOMIC_MASS_AMU,
    STANDARD_ATOMIC_WEIGHTS,
    AtomicMassRegistry,
    MassLookup,
    element_symbol,
    parse_formula,
    parse_isotope,
)
from isoforge.data.routes import (
    CrossSection,
    CrossSectionUnit,
    OperatingConditions,
    ReactionRoute,
    ReactionType,
    conditions_from_dict,
    route_from_dict,
)

__all__ = [
    "DEFAULT_REGISTRY",
    "FALLBACK_ATOMIC_MASS_AMU",
    "STANDARD_ATOMIC_WEIGHTS",
    "AtomicMassRegistry",
    "MassLookup",
    "element_symbol",
    "parse_formula",
    "parse_isotope",
    "CrossSection",
    "CrossSectionUnit",
    "OperatingConditions",
    "ReactionRoute",
    "ReactionType",
    "conditions_from_dict",
    "route_from_dict",
]
