"""Route evaluation: from a reaction route and operating conditions to
EOB activity, specific activity and delivered activity.

The evaluator is the caller of the physics kernel. It picks the cross
section and flux appropriate to the reaction type, resolves target and
product masses through an injected :class:`AtomicMassRegistry`, hands
non-constant flux to the time or spatial integrator, and layers a
planning-grade feasibility classification on top of the numbers.

Every planning approximation made along the way (placeholder atomic mass,
suspicious resonance integral, burn-up dominating decay, default chemistry
yield) is logged, and also copied into :attr:`EvaluationResult.warnings`
so it travels with the result.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from isoforge.config import DEFAULT_EVALUATOR, DEFAULT_INTEGRATION, EvaluatorConfig, IntegrationConfig
from isoforge.constants import ATOMIC_MASS_UNIT_G, SECONDS_PER_DAY
from isoforge.data.atomic_masses import DEFAULT_REGISTRY, AtomicMassRegistry, MassLookup, element_symbol
from isoforge.data.routes import CrossSection, OperatingConditions, ReactionRoute, ReactionType
from isoforge.errors import InvalidParameterError, MissingDataError
from isoforge.physics.activation import (
    activity,
    atoms_at_eob,
    atoms_at_eob_with_burnup,
    decay_constant,
    product_burnup_rate,
    reaction_rate,
    saturation_factor,
    specific_activity,
    target_atoms,
    threshold_cross_section,
)
from isoforge.physics.beam import particle_rate
from isoforge.physics.delivery import DeliveredActivity, delivered_activity
from isoforge.physics.epithermal import RESONANCE_INTEGRAL_WARN_CM2, reaction_rate_with_epithermal
from isoforge.physics.flux_profiles import flux_at_radius
from isoforge.physics.spatial_integration import atoms_at_eob_spatial, reaction_rate_spatial
from isoforge.physics.time_integration import atoms_at_eob_time_varying, mean_flux

logger = logging.getLogger(__name__)


class Feasibility(Enum):
    FEASIBLE = "Feasible"
    CONSTRAINED = "Feasible with constraints"
    NOT_RECOMMENDED = "Not recommended"


# EOB activity thresholds (GBq): viable, marginal, not viable
APPLICATION_THRESHOLDS_GBQ: Dict[str, Tuple[float, float, float]] = {
    "medical": (1.0, 0.1, 0.01),
    "industrial": (0.1, 0.01, 0.001),
    "research": (0.01, 0.001, 0.0001),
}


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of one route evaluation.

    Attributes
    ----------
    route_id : str
        Route identifier
    reaction_rate : float
        Production rate (reactions/s), including any epithermal term
    atoms_eob : float
        Product atoms at end of bombardment
    activity_bq : float
        Product activity at EOB (Bq)
    specific_activity_bq_g : float
        EOB activity per gram of product (plus carrier when carrier-added)
    cross_section_cm2 : float
        Cross section actually used (cm²), after threshold treatment
    effective_flux : float
        Flux actually used (cm⁻² s⁻¹); time- or area-averaged for profiles
    saturation_factor : float
        1 − exp(−λ_eff t_irr) with λ_eff including product burn-up
    delivered_activity_bq : float
        Activity after chemistry delay, transport and chemistry yield
    self_shielding_factor : float
        Self-shielding factor applied
    burnup_rate_constant : float
        Product burn-up rate constant (s⁻¹); 0 when not modelled
    delivery : DeliveredActivity, optional
        Post-EOB bookkeeping; None when the route was rejected
    feasible : bool
        False when the route is not recommended
    classification : Feasibility
        Planning classification
    reasons : tuple of str
        Why the route is constrained or rejected
    warnings : tuple of str
        Planning approximations made during the evaluation
    mass_fallback_used : bool
        True when a placeholder atomic mass was substituted
    """

    route_id: str
    reaction_rate: float
    atoms_eob: float
    activity_bq: float
    specific_activity_bq_g: float
    cross_section_cm2: float
    effective_flux: float
    saturation_factor: float
    delivered_activity_bq: float
    self_shielding_factor: float = 1.0
    burnup_rate_constant: float = 0.0
    delivery: Optional[DeliveredActivity] = None
    feasible: bool = True
    classification: Feasibility = Feasibility.FEASIBLE
    reasons: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    mass_fallback_used: bool = False

    @property
    def activity_gbq(self) -> float:
        return self.activity_bq / 1e9

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation."""
        data = asdict(self)
        data["classification"] = self.classification.value
        data["reasons"] = list(self.reasons)
        data["warnings"] = list(self.warnings)
        return data

    def summary(self) -> str:
        """Generate text summary."""
        lines = [
            "=" * 60,
            f"ROUTE EVALUATION: {self.route_id}",
            "=" * 60,
            f"Classification: {self.classification.value}",
            f"Reaction rate:        {self.reaction_rate:.4e} reactions/s",
            f"Cross section used:   {self.cross_section_cm2:.4e} cm^2",
            f"Effective flux:       {self.effective_flux:.4e} cm^-2 s^-1",
            f"Saturation factor:    {self.saturation_factor:.4f}",
            f"Atoms at EOB:         {self.atoms_eob:.4e}",
            f"Activity at EOB:      {self.activity_bq:.4e} Bq ({self.activity_gbq:.3f} GBq)",
            f"Specific activity:    {self.specific_activity_bq_g:.4e} Bq/g",
            f"Delivered activity:   {self.delivered_activity_bq:.4e} Bq",
        ]
        if self.reasons:
            lines.append("")
            lines.append("Reasons:")
            lines.extend(f"  {reason}" for reason in self.reasons)
        if self.warnings:
            lines.append("")
            lines.append("Warnings:")
            lines.extend(f"  {warning}" for warning in self.warnings)
        lines.append("=" * 60)
        return "\n".join(lines)


NUMERIC_OUTPUTS = (
    "reaction_rate",
    "atoms_eob",
    "activity_bq",
    "specific_activity_bq_g",
    "cross_section_cm2",
    "effective_flux",
    "saturation_factor",
    "delivered_activity_bq",
    "self_shielding_factor",
    "burnup_rate_constant",
)


class RouteEvaluator:
    """
    Evaluate production routes against operating conditions.

    Parameters
    ----------
    masses : AtomicMassRegistry, optional
        Atomic-mass registry; defaults to the standard atomic weights
    config : EvaluatorConfig, optional
        Defaults for unspecified operating conditions
    integration : IntegrationConfig, optional
        Numerical settings for the time and spatial integrators

    The evaluator keeps no per-call state; one instance can serve any
    number of evaluations.
    """

    def __init__(
        self,
        masses: Optional[AtomicMassRegistry] = None,
        config: Optional[EvaluatorConfig] = None,
        integration: Optional[IntegrationConfig] = None,
    ):
        self.masses = masses if masses is not None else DEFAULT_REGISTRY
        self.config = config or DEFAULT_EVALUATOR
        self.integration = integration or DEFAULT_INTEGRATION

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def cross_section(self, route: ReactionRoute, energy_mev: float) -> float:
        """Cross section (cm²) for the route at the given projectile energy.

        Raises
        ------
        MissingDataError
            If the route lacks the cross section its reaction type needs.
        """
        xs = route.required_cross_section
        if xs is None:
            kind = "thermal" if route.reaction_type is ReactionType.CAPTURE else "fast"
            raise MissingDataError(
                f"Route '{route.route_id}' ({route.reaction_type.value}) has no {kind} cross-section"
            )
        if not route.has_threshold:
            return xs.cm2
        reaction = "n,2n" if route.reaction_type is ReactionType.FAST_N2N else "n,p"
        return threshold_cross_section(
            energy_mev,
            route.threshold_mev,
            xs.cm2,
            scale_with_energy=self.config.scale_threshold_cross_sections,
            reaction=reaction,
        )

    def scalar_flux(self, route: ReactionRoute, conditions: OperatingConditions) -> float:
        """Flux (cm⁻² s⁻¹) implied by the conditions for the route's reaction type."""
        if route.reaction_type is ReactionType.CAPTURE:
            return conditions.thermal_flux if conditions.thermal_flux is not None else self.config.thermal_flux
        if route.reaction_type.is_fast:
            return conditions.fast_flux if conditions.fast_flux is not None else self.config.fast_flux
        if conditions.beam_current_a is None or conditions.beam_area_cm2 is None:
            raise InvalidParameterError(
                f"Charged-particle route '{route.route_id}' needs beam_current_a and beam_area_cm2"
            )
        return particle_rate(conditions.beam_current_a, conditions.charge_state) / conditions.beam_area_cm2

    def _target_mass_per_atom(self, route: ReactionRoute) -> MassLookup:
        if route.target_compound:
            element = element_symbol(route.target_isotope) or ""
            return self.masses.compound_mass_per_atom(route.target_compound, element)
        return self.masses.lookup_isotope(route.target_isotope)

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def evaluate(
        self,
        route: ReactionRoute,
        conditions: Optional[OperatingConditions] = None,
    ) -> EvaluationResult:
        """
        Evaluate one route.

        Parameters
        ----------
        route : ReactionRoute
            Route to evaluate; never modified
        conditions : OperatingConditions, optional
            Operating conditions; unspecified values take the config defaults

        Returns
        -------
        EvaluationResult

        Raises
        ------
        MissingDataError
            If the route lacks its required cross section
        InvalidParameterError
            For inconsistent conditions (both a temporal and a spatial
            profile, a spatial profile without a target radius, a
            charged-particle route without beam parameters)
        """
        conditions = conditions or OperatingConditions()
        cfg = self.config
        notes: List[str] = []
        reasons: List[str] = []

        if conditions.temporal_profile is not None and conditions.spatial_profile is not None:
            raise InvalidParameterError("Temporal and spatial flux profiles cannot be combined in one evaluation")

        energy = conditions.energy_mev if conditions.energy_mev is not None else cfg.neutron_energy_mev
        sigma = self.cross_section(route, energy)
        phi = self.scalar_flux(route, conditions)
        f_shield = conditions.self_shielding_factor if conditions.self_shielding_factor is not None else 1.0

        # Rejections before any physics
        if route.has_threshold and sigma == 0:
            if energy < route.threshold_mev:
                reason = (
                    f"Neutron energy ({energy:.2f} MeV) below reaction threshold ({route.threshold_mev} MeV)"
                )
            else:
                reason = f"Effective cross-section is zero (threshold not met at {energy:.2f} MeV)"
            return self._rejected(route, reason, notes, sigma, phi, f_shield)
        if not route.chemical_separable and not route.carrier_added_acceptable:
            reason = "Product is chemically inseparable and carrier-added production is not acceptable"
            return self._rejected(route, reason, notes, sigma, phi, f_shield)

        target_mass = conditions.target_mass_g if conditions.target_mass_g is not None else cfg.target_mass_g
        enrichment = conditions.enrichment if conditions.enrichment is not None else cfg.enrichment
        t_irr = (
            conditions.irradiation_time_s if conditions.irradiation_time_s is not None else cfg.irradiation_time_s
        )
        density = (
            conditions.target_density_atoms_cm3
            if conditions.target_density_atoms_cm3 is not None
            else cfg.target_density_atoms_cm3
        )
        thickness = (
            conditions.target_thickness_cm if conditions.target_thickness_cm is not None else cfg.target_thickness_cm
        )

        target_lookup = self._target_mass_per_atom(route)
        product_lookup = self.masses.lookup_isotope(route.product_isotope)
        for lookup in (target_lookup, product_lookup):
            if not lookup.found:
                notes.append(
                    f"Atomic mass for '{lookup.symbol}' unknown; placeholder {lookup.mass_amu} amu used"
                )
        n_target = target_atoms(target_mass, target_lookup.mass_amu, enrichment)
        volume = target_atoms(target_mass, target_lookup.mass_amu) / density
        lam = decay_constant(route.product_half_life_days)

        # Production rate without burn-up
        if conditions.spatial_profile is not None:
            if conditions.target_radius_cm is None:
                raise InvalidParameterError("A spatial flux profile needs target_radius_cm")
            radius = conditions.target_radius_cm
            isotope_density = density * enrichment
            rate = reaction_rate_spatial(
                isotope_density,
                sigma,
                conditions.spatial_profile,
                f_shield,
                radius,
                thickness,
                geometry=conditions.geometry,
                config=self.integration,
            )
            volume = math.pi * radius**2 * thickness
            n_target = isotope_density * volume
            denominator = n_target * sigma * f_shield
            if denominator > 0:
                phi = rate / denominator
            else:
                phi = float(flux_at_radius(conditions.spatial_profile, 0.0))
        elif conditions.temporal_profile is not None:
            phi = mean_flux(conditions.temporal_profile, t_irr, config=self.integration)
            rate = reaction_rate(n_target, sigma, phi, f_shield)
        else:
            rate = reaction_rate(n_target, sigma, phi, f_shield)

        # Product burn-up
        k_burn = 0.0
        if route.burnup_cross_section is not None and route.burnup_cross_section.cm2 > 0:
            k_burn = self._burnup_rate(
                rate, lam, t_irr, phi, route.burnup_cross_section.cm2,
                volume, density, thickness,
            )
            if k_burn > lam:
                message = (
                    f"Product burn-up dominates decay for route {route.route_id}: "
                    f"k_burn ({k_burn:.2e} s^-1) > lambda ({lam:.2e} s^-1); yield strongly suppressed"
                )
                logger.warning(message)
                notes.append(message)
        lam_eff = lam + k_burn
        f_sat = saturation_factor(lam_eff, t_irr)

        # Epithermal term (capture only)
        epithermal = (
            route.reaction_type is ReactionType.CAPTURE
            and route.resonance_integral is not None
            and conditions.epithermal_flux > 0
        )
        if epithermal and route.resonance_integral.cm2 > RESONANCE_INTEGRAL_WARN_CM2:
            notes.append(
                f"Resonance integral {route.resonance_integral.cm2:.3e} cm^2 is implausibly large; "
                "check for an unconverted barn or barn*eV value"
            )

        # Atoms at EOB
        if conditions.spatial_profile is not None or conditions.temporal_profile is not None:
            if conditions.spatial_profile is not None:
                atoms = atoms_at_eob_spatial(
                    density * enrichment,
                    sigma,
                    conditions.spatial_profile,
                    f_shield,
                    conditions.target_radius_cm,
                    thickness,
                    lam_eff,
                    t_irr,
                    geometry=conditions.geometry,
                    config=self.integration,
                )
            else:
                atoms = atoms_at_eob_time_varying(
                    n_target,
                    sigma,
                    conditions.temporal_profile,
                    f_shield,
                    lam_eff,
                    t_irr,
                    config=self.integration,
                )
            if epithermal:
                # Epithermal flux is taken as steady; its term adds linearly.
                rate_epi = reaction_rate_with_epithermal(
                    n_target, sigma, 0.0, route.resonance_integral.cm2, conditions.epithermal_flux, f_shield
                )
                rate += rate_epi
                atoms += atoms_at_eob(rate_epi, f_sat, lam_eff)
        else:
            if epithermal:
                rate = reaction_rate_with_epithermal(
                    n_target, sigma, phi, route.resonance_integral.cm2, conditions.epithermal_flux, f_shield
                )
            if k_burn > 0:
                atoms = atoms_at_eob_with_burnup(rate, lam, k_burn, t_irr)
            else:
                atoms = atoms_at_eob(rate, f_sat, lam)

        activity_eob = activity(lam, atoms)

        product_mass = atoms * product_lookup.mass_amu * ATOMIC_MASS_UNIT_G
        total_mass = product_mass
        if route.carrier_added_acceptable:
            carrier = route.carrier_mass_g if route.carrier_mass_g is not None else target_mass
            total_mass += carrier
        spec_activity = specific_activity(activity_eob, max(total_mass, cfg.min_product_mass_g))

        chem_yield = self._chemistry_yield(route, notes)
        delivery = delivered_activity(
            activity_eob,
            lam,
            chemistry_delay_s=conditions.chemistry_delay_s,
            transport_s=conditions.transport_s,
            chemistry_yield=chem_yield,
        )

        # Classification
        feasible = True
        if route.regulatory_flag == "exploratory":
            reasons.append("Exploratory route - requires special handling and regulatory review")
        elif route.regulatory_flag == "constrained":
            reasons.append("Route has operational constraints")

        context = conditions.application_context
        viable, marginal, not_viable = APPLICATION_THRESHOLDS_GBQ.get(context, APPLICATION_THRESHOLDS_GBQ["medical"])
        activity_gbq = activity_eob / 1e9
        if activity_gbq < not_viable:
            feasible = False
            reasons.append(
                f"Activity yield at EOB ({activity_gbq:.4f} GBq) below {context} application threshold "
                f"({not_viable} GBq)"
            )
        elif activity_gbq < marginal:
            reasons.append(
                f"Activity yield at EOB ({activity_gbq:.3f} GBq) is marginal for {context} application "
                f"(threshold: {marginal} GBq)"
            )
        elif activity_gbq < viable:
            reasons.append(
                f"Activity yield at EOB ({activity_gbq:.3f} GBq) may be insufficient for {context} application "
                f"(recommended: >= {viable} GBq)"
            )

        if not route.carrier_added_acceptable and spec_activity < cfg.nca_specific_activity_bq_g:
            reasons.append(
                f"Specific activity may be insufficient for n.c.a. requirements ({spec_activity / 1e12:.2f} TBq/g)"
            )
        if rate < cfg.low_reaction_rate:
            notes.append(f"Low reaction rate ({rate:.2e} reactions/s) - production may be inefficient")
        if phi > 1e14 and t_irr > 7 * SECONDS_PER_DAY and thickness > 0.2:
            message = (
                "High-flux, long-irradiation, thick-target regime: yields may be overestimated "
                f"(flux {phi:.2e} cm^-2 s^-1, {t_irr / SECONDS_PER_DAY:.1f} d, {thickness:.2f} cm)"
            )
            logger.warning(message)
            notes.append(message)

        if not feasible:
            classification = Feasibility.NOT_RECOMMENDED
        elif reasons:
            classification = Feasibility.CONSTRAINED
        else:
            classification = Feasibility.FEASIBLE

        logger.debug(
            "Route %s: R=%.3e /s, N_EOB=%.3e, A=%.3e Bq (%s)",
            route.route_id, rate, atoms, activity_eob, classification.value,
        )

        return EvaluationResult(
            route_id=route.route_id,
            reaction_rate=rate,
            atoms_eob=atoms,
            activity_bq=activity_eob,
            specific_activity_bq_g=spec_activity,
            cross_section_cm2=sigma,
            effective_flux=phi,
            saturation_factor=f_sat,
            delivered_activity_bq=delivery.activity_delivered,
            self_shielding_factor=f_shield,
            burnup_rate_constant=k_burn,
            delivery=delivery,
            feasible=feasible,
            classification=classification,
            reasons=tuple(reasons),
            warnings=tuple(notes),
            mass_fallback_used=not (target_lookup.found and product_lookup.found),
        )

    def evaluate_many(
        self,
        routes: List[ReactionRoute],
        conditions: Optional[OperatingConditions] = None,
    ) -> List[EvaluationResult]:
        """Evaluate several routes under the same conditions."""
        return [self.evaluate(route, conditions) for route in routes]

    # ------------------------------------------------------------------
    # Uncertainty kernels
    # ------------------------------------------------------------------

    def nominal_parameters(
        self,
        route: ReactionRoute,
        conditions: Optional[OperatingConditions] = None,
    ) -> Dict[str, float]:
        """Nominal values of the parameters :meth:`kernel` accepts.

        ``cross_section_scale`` multiplies every cross section of the route;
        the flux parameter follows the reaction type.
        """
        conditions = conditions or OperatingConditions()
        cfg = self.config
        params = {
            "cross_section_scale": 1.0,
            "product_half_life_days": route.product_half_life_days,
            "target_mass_g": conditions.target_mass_g if conditions.target_mass_g is not None else cfg.target_mass_g,
            "enrichment": conditions.enrichment if conditions.enrichment is not None else cfg.enrichment,
            "irradiation_time_s": (
                conditions.irradiation_time_s
                if conditions.irradiation_time_s is not None
                else cfg.irradiation_time_s
            ),
            "self_shielding_factor": (
                conditions.self_shielding_factor if conditions.self_shielding_factor is not None else 1.0
            ),
        }
        if route.reaction_type is ReactionType.CAPTURE:
            params["thermal_flux"] = self.scalar_flux(route, conditions)
        elif route.reaction_type.is_fast:
            params["fast_flux"] = self.scalar_flux(route, conditions)
        elif conditions.beam_current_a is not None:
            params["beam_current_a"] = conditions.beam_current_a
        return params

    def kernel(
        self,
        route: ReactionRoute,
        conditions: Optional[OperatingConditions] = None,
        output: str = "activity_bq",
    ) -> Callable[[Mapping[str, float]], float]:
        """
        Deterministic function of a parameter mapping for Monte Carlo use.

        Parameters
        ----------
        route, conditions
            Baseline route and conditions
        output : str
            Numeric :class:`EvaluationResult` field to return

        Returns
        -------
        callable
            ``kernel(params) -> float``; each call evaluates the route with
            the named parameters substituted.
        """
        conditions = conditions or OperatingConditions()
        if output not in NUMERIC_OUTPUTS:
            raise InvalidParameterError(f"Unknown evaluation output: {output!r}")
        condition_fields = set(OperatingConditions.__dataclass_fields__)

        def run(params: Mapping[str, float]) -> float:
            route_updates: Dict[str, Any] = {}
            condition_updates: Dict[str, Any] = {}
            for name, value in params.items():
                if name == "cross_section_scale":
                    route_updates.update(_scaled_cross_sections(route, value))
                elif name == "product_half_life_days":
                    route_updates[name] = value
                elif name in condition_fields:
                    condition_updates[name] = value
                else:
                    raise InvalidParameterError(f"Unknown kernel parameter: {name!r}")
            result = self.evaluate(replace(route, **route_updates), replace(conditions, **condition_updates))
            return float(getattr(result, output))

        return run

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _burnup_rate(
        self,
        rate: float,
        lam: float,
        t_irr: float,
        phi: float,
        sigma_burn: float,
        volume: float,
        density: float,
        thickness: float,
    ) -> float:
        """Product burn-up constant with the product's own self-shielding.

        The product density is estimated from the burn-up-free inventory
        spread over the irradiated volume, capped at the target density.
        """
        n_product = atoms_at_eob(rate, saturation_factor(lam, t_irr), lam)
        product_density = min(n_product / volume, density) if volume > 0 else 0.0
        return product_burnup_rate(phi, sigma_burn, product_density, thickness)

    def _chemistry_yield(self, route: ReactionRoute, notes: List[str]) -> float:
        """Separation yield to apply; an implicit 100 % yield is never assumed."""
        cfg = self.config
        if route.chemistry_yield is not None:
            return route.chemistry_yield
        if route.chemical_separable:
            message = (
                f"No chemistry yield specified for route {route.route_id}; "
                f"applying default of {cfg.default_chemistry_yield:.0%}"
            )
            logger.info(message)
            notes.append(message)
            return cfg.default_chemistry_yield
        return 1.0

    def _rejected(
        self,
        route: ReactionRoute,
        reason: str,
        notes: List[str],
        sigma: float,
        phi: float,
        f_shield: float,
    ) -> EvaluationResult:
        logger.info("Route %s not recommended: %s", route.route_id, reason)
        return EvaluationResult(
            route_id=route.route_id,
            reaction_rate=0.0,
            atoms_eob=0.0,
            activity_bq=0.0,
            specific_activity_bq_g=0.0,
            cross_section_cm2=sigma,
            effective_flux=phi,
            saturation_factor=0.0,
            delivered_activity_bq=0.0,
            self_shielding_factor=f_shield,
            feasible=False,
            classification=Feasibility.NOT_RECOMMENDED,
            reasons=(reason,),
            warnings=tuple(notes),
        )


def _scaled_cross_sections(route: ReactionRoute, scale: float) -> Dict[str, CrossSection]:
    updates = {}
    for name in ("thermal_cross_section", "fast_cross_section", "resonance_integral"):
        xs = getattr(route, name)
        if xs is not None:
            updates[name] = CrossSection(xs.value * scale, xs.unit)
    return updates


__all__ = [
    "Feasibility",
    "APPLICATION_THRESHOLDS_GBQ",
    "NUMERIC_OUTPUTS",
    "EvaluationResult",
    "RouteEvaluator",
]
