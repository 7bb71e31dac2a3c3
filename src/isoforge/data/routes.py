"""
Reaction-route and operating-condition records.

Both are frozen value objects: a route is read-only reference data taken
from a registry, the conditions are supplied per evaluation. The
``*_from_dict`` helpers read the JSON shapes used by the command line
front end, e.g.::

    {
        "id": "mo98-ng-mo99",
        "target_isotope": "Mo-98",
        "product_isotope": "Mo-99",
        "reaction": "n,gamma",
        "thermal_cross_section": {"value": 0.13, "unit": "barn"},
        "product_half_life_days": 2.75
    }
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from isoforge.constants import BARN_TO_CM2, MILLIBARN_TO_CM2, SECONDS_PER_DAY, SECONDS_PER_HOUR
from isoforge.errors import (
    InvalidParameterError,
    require_fraction,
    require_non_negative,
    require_positive,
)
from isoforge.physics.flux_profiles import (
    SpatialProfile,
    TemporalProfile,
    spatial_profile_from_dict,
    temporal_profile_from_dict,
)
from isoforge.physics.spatial_integration import TargetGeometry


class ReactionType(Enum):
    """Production reaction families."""

    CAPTURE = "capture"
    FAST_NP = "fast_np"
    FAST_N2N = "fast_n2n"
    CHARGED_PARTICLE = "charged_particle"

    @property
    def is_fast(self) -> bool:
        return self in (ReactionType.FAST_NP, ReactionType.FAST_N2N)

    @classmethod
    def from_reaction(cls, reaction: str) -> "ReactionType":
        """Classify reaction notation such as ``'(n,γ)'``, ``'n,2n'`` or ``'p,n'``."""
        key = reaction.strip().lower().replace("(", "").replace(")", "").replace(" ", "")
        for member in cls:
            if key == member.value:
                return member
        if key in ("n,γ", "n,gamma", "n,g"):
            return cls.CAPTURE
        if key == "n,2n":
            return cls.FAST_N2N
        if key.startswith("n,"):
            return cls.FAST_NP
        if "," in key:
            return cls.CHARGED_PARTICLE
        raise InvalidParameterError(f"Unrecognised reaction notation: {reaction!r}")


class CrossSectionUnit(Enum):
    CM2 = "cm2"
    BARN = "barn"
    MILLIBARN = "mb"

    @property
    def to_cm2(self) -> float:
        """Multiplier converting a value in this unit to cm²."""
        return _UNIT_TO_CM2[self]

    @classmethod
    def parse(cls, unit: Union[str, "CrossSectionUnit"]) -> "CrossSectionUnit":
        if isinstance(unit, CrossSectionUnit):
            return unit
        key = unit.strip().lower()
        aliases = {"b": cls.BARN, "barns": cls.BARN, "millibarn": cls.MILLIBARN, "cm^2": cls.CM2}
        if key in aliases:
            return aliases[key]
        try:
            return cls(key)
        except ValueError:
            raise InvalidParameterError(f"Unknown cross-section unit: {unit!r}") from None


_UNIT_TO_CM2 = {
    CrossSectionUnit.CM2: 1.0,
    CrossSectionUnit.BARN: BARN_TO_CM2,
    CrossSectionUnit.MILLIBARN: MILLIBARN_TO_CM2,
}


@dataclass(frozen=True)
class CrossSection:
    """A cross-section value with an explicit unit."""

    value: float
    unit: CrossSectionUnit = CrossSectionUnit.CM2

    def __post_init__(self) -> None:
        require_non_negative(cross_section=self.value)
        object.__setattr__(self, "unit", CrossSectionUnit.parse(self.unit))

    @property
    def cm2(self) -> float:
        return self.value * self.unit.to_cm2

    @classmethod
    def from_value(cls, value: Any) -> "CrossSection":
        """Accept ``{"value": v, "unit": u}``, a CrossSection, or a bare number in cm²."""
        if isinstance(value, CrossSection):
            return value
        if isinstance(value, Mapping):
            return cls(float(value["value"]), value.get("unit", "cm2"))
        return cls(float(value))


@dataclass(frozen=True)
class ReactionRoute:
    """
    A radioisotope production route.

    Attributes
    ----------
    route_id : str
        Registry identifier
    target_isotope, product_isotope : str
        Isotope strings such as ``'Mo-98'``
    reaction_type : ReactionType
        Reaction family; selects the cross section and flux used
    product_half_life_days : float
        Product half-life (days), positive
    thermal_cross_section : CrossSection, optional
        Required by capture routes
    fast_cross_section : CrossSection, optional
        Cross section at the operating energy; required by fast-neutron and
        charged-particle routes
    threshold_mev : float, optional
        Reaction threshold; None or 0 means no threshold
    resonance_integral : CrossSection, optional
        Effective resonance integral for the epithermal term
    burnup_cross_section : CrossSection, optional
        Product destruction cross section
    target_compound : str, optional
        Chemical form of the target (``'Lu2O3'``); target mass refers to it
    chemical_separable, carrier_added_acceptable : bool
        Chemistry flags
    carrier_mass_g : float, optional
        Stable carrier mass for carrier-added specific activity
    chemistry_yield : float, optional
        Stated separation yield
    regulatory_flag : str
        ``standard``, ``constrained`` or ``exploratory``
    """

    route_id: str
    target_isotope: str
    product_isotope: str
    reaction_type: ReactionType
    product_half_life_days: float
    thermal_cross_section: Optional[CrossSection] = None
    fast_cross_section: Optional[CrossSection] = None
    threshold_mev: Optional[float] = None
    resonance_integral: Optional[CrossSection] = None
    burnup_cross_section: Optional[CrossSection] = None
    target_compound: Optional[str] = None
    chemical_separable: bool = True
    carrier_added_acceptable: bool = False
    carrier_mass_g: Optional[float] = None
    chemistry_yield: Optional[float] = None
    regulatory_flag: str = "standard"
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self) -> None:
        require_positive(product_half_life_days=self.product_half_life_days)
        if self.threshold_mev is not None:
            require_non_negative(threshold_mev=self.threshold_mev)
        if self.carrier_mass_g is not None:
            require_non_negative(carrier_mass_g=self.carrier_mass_g)
        if self.chemistry_yield is not None:
            require_fraction(chemistry_yield=self.chemistry_yield)

    @property
    def has_threshold(self) -> bool:
        return self.threshold_mev is not None and self.threshold_mev > 0

    @property
    def required_cross_section(self) -> Optional[CrossSection]:
        """The cross section the reaction type calls for, or None if absent."""
        if self.reaction_type is ReactionType.CAPTURE:
            return self.thermal_cross_section
        return self.fast_cross_section


@dataclass(frozen=True)
class OperatingConditions:
    """
    Per-evaluation operating conditions.

    Any quantity left as None takes the evaluator default. A temporal or
    spatial profile, when given, replaces the scalar flux.
    """

    thermal_flux: Optional[float] = None
    fast_flux: Optional[float] = None
    epithermal_flux: float = 0.0
    beam_current_a: Optional[float] = None
    beam_area_cm2: Optional[float] = None
    charge_state: float = 1.0
    energy_mev: Optional[float] = None
    target_mass_g: Optional[float] = None
    enrichment: Optional[float] = None
    target_density_atoms_cm3: Optional[float] = None
    target_thickness_cm: Optional[float] = None
    target_radius_cm: Optional[float] = None
    geometry: TargetGeometry = TargetGeometry.CIRCULAR
    irradiation_time_s: Optional[float] = None
    self_shielding_factor: Optional[float] = None
    temporal_profile: Optional[TemporalProfile] = None
    spatial_profile: Optional[SpatialProfile] = None
    chemistry_delay_s: float = 0.0
    transport_s: float = 0.0
    application_context: str = "medical"

    def __post_init__(self) -> None:
        optional_non_negative = {
            "thermal_flux": self.thermal_flux,
            "fast_flux": self.fast_flux,
            "beam_current_a": self.beam_current_a,
            "energy_mev": self.energy_mev,
            "irradiation_time_s": self.irradiation_time_s,
        }
        require_non_negative(
            epithermal_flux=self.epithermal_flux,
            chemistry_delay_s=self.chemistry_delay_s,
            transport_s=self.transport_s,
            **{k: v for k, v in optional_non_negative.items() if v is not None},
        )
        optional_positive = {
            "beam_area_cm2": self.beam_area_cm2,
            "target_mass_g": self.target_mass_g,
            "target_density_atoms_cm3": self.target_density_atoms_cm3,
            "target_thickness_cm": self.target_thickness_cm,
            "target_radius_cm": self.target_radius_cm,
        }
        require_positive(
            charge_state=self.charge_state,
            **{k: v for k, v in optional_positive.items() if v is not None},
        )
        if self.enrichment is not None:
            require_fraction(enrichment=self.enrichment)
        if self.self_shielding_factor is not None:
            require_fraction(self_shielding_factor=self.self_shielding_factor)
        if not isinstance(self.geometry, TargetGeometry):
            object.__setattr__(self, "geometry", TargetGeometry.parse(self.geometry))


# =============================================================================
# Dictionary parsing
# =============================================================================


def _optional_cross_section(data: Mapping[str, Any], key: str) -> Optional[CrossSection]:
    value = data.get(key)
    return None if value is None else CrossSection.from_value(value)


def _optional_float(data: Mapping[str, Any], key: str) -> Optional[float]:
    value = data.get(key)
    return None if value is None else float(value)


def route_from_dict(data: Mapping[str, Any]) -> ReactionRoute:
    """
    Build a :class:`ReactionRoute` from a registry record.

    ``reaction_type`` may be given directly or inferred from ``reaction``
    notation. A registry-style ``nominal_sigma_barns`` fills whichever cross
    section the reaction type requires when that one is not given.
    """
    missing = [k for k in ("target_isotope", "product_isotope", "product_half_life_days") if k not in data]
    if missing:
        raise InvalidParameterError(f"Route record missing fields: {', '.join(missing)}")

    if "reaction_type" in data:
        reaction_type = ReactionType(data["reaction_type"])
    else:
        reaction_type = ReactionType.from_reaction(data.get("reaction", "n,gamma"))

    thermal = _optional_cross_section(data, "thermal_cross_section")
    fast = _optional_cross_section(data, "fast_cross_section")
    nominal = data.get("nominal_sigma_barns")
    if nominal is not None:
        legacy = CrossSection(float(nominal), CrossSectionUnit.BARN)
        if reaction_type is ReactionType.CAPTURE and thermal is None:
            thermal = legacy
        elif reaction_type is not ReactionType.CAPTURE and fast is None:
            fast = legacy

    burnup = _optional_cross_section(data, "burnup_cross_section")
    if burnup is None and data.get("sigma_product_burn_cm2") is not None:
        burnup = CrossSection(float(data["sigma_product_burn_cm2"]))

    known = {
        "id", "route_id", "target_isotope", "product_isotope", "reaction", "reaction_type",
        "product_half_life_days", "thermal_cross_section", "fast_cross_section",
        "nominal_sigma_barns", "threshold_MeV", "threshold_mev", "resonance_integral",
        "burnup_cross_section", "sigma_product_burn_cm2", "target_compound",
        "chemical_separable", "carrier_added_acceptable", "carrier_mass", "carrier_mass_g",
        "chemistry_yield", "regulatory_flag",
    }
    threshold = data.get("threshold_mev", data.get("threshold_MeV"))
    carrier = data.get("carrier_mass_g", data.get("carrier_mass"))

    return ReactionRoute(
        route_id=str(data.get("route_id", data.get("id", ""))),
        target_isotope=data["target_isotope"],
        product_isotope=data["product_isotope"],
        reaction_type=reaction_type,
        product_half_life_days=float(data["product_half_life_days"]),
        thermal_cross_section=thermal,
        fast_cross_section=fast,
        threshold_mev=None if threshold is None else float(threshold),
        resonance_integral=_optional_cross_section(data, "resonance_integral"),
        burnup_cross_section=burnup,
        target_compound=data.get("target_compound"),
        chemical_separable=bool(data.get("chemical_separable", True)),
        carrier_added_acceptable=bool(data.get("carrier_added_acceptable", False)),
        carrier_mass_g=None if carrier is None else float(carrier),
        chemistry_yield=_optional_float(data, "chemistry_yield"),
        regulatory_flag=data.get("regulatory_flag", "standard"),
        metadata={k: v for k, v in data.items() if k not in known},
    )


def conditions_from_dict(data: Mapping[str, Any]) -> OperatingConditions:
    """
    Build :class:`OperatingConditions` from a JSON record.

    Durations may be given in seconds (``irradiation_time_s``) or in the
    conventional hours/days keys (``irradiation_time_days``,
    ``chemistry_delay_hours``, ``transport_time_hours``).
    """
    params: Dict[str, Any] = dict(data)

    if "irradiation_time_days" in params:
        params["irradiation_time_s"] = float(params.pop("irradiation_time_days")) * SECONDS_PER_DAY
    if "chemistry_delay_hours" in params:
        params["chemistry_delay_s"] = float(params.pop("chemistry_delay_hours")) * SECONDS_PER_HOUR
    if "transport_time_hours" in params:
        params["transport_s"] = float(params.pop("transport_time_hours")) * SECONDS_PER_HOUR

    if params.get("temporal_profile") is not None:
        params["temporal_profile"] = temporal_profile_from_dict(params["temporal_profile"])
    if params.get("spatial_profile") is not None:
        params["spatial_profile"] = spatial_profile_from_dict(params["spatial_profile"])
    if "geometry" in params:
        params["geometry"] = TargetGeometry.parse(params["geometry"])

    allowed = set(OperatingConditions.__dataclass_fields__)
    unknown = sorted(set(params) - allowed)
    if unknown:
        raise InvalidParameterError(f"Unknown operating-condition fields: {', '.join(unknown)}")

    return OperatingConditions(**params)


__all__ = [
    "ReactionType",
    "CrossSectionUnit",
    "CrossSection",
    "ReactionRoute",
    "OperatingConditions",
    "route_from_dict",
    "conditions_from_dict",
]
