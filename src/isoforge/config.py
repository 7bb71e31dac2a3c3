"""Configuration dataclasses for the numerical integrators and route evaluation."""

from __future__ import annotations

from dataclasses import dataclass

from isoforge.constants import DT_NEUTRON_ENERGY_MEV


@dataclass(frozen=True)
class IntegrationConfig:
    """Numerical settings shared by the quadrature and decay-chain solvers.

    Attributes
    ----------
    time_steps : int
        Nominal number of time steps; the default step is
        ``min(t / time_steps, max_time_step_s)``.
    max_time_step_s : float
        Upper bound on the default time step (s).
    radial_rings : int
        Nominal number of radial rings for disk integration.
    max_ring_width_cm : float
        Upper bound on the default ring width (cm).
    stability_threshold : float
        Largest allowed ``lambda_max * dt`` for the explicit decay stepper.
    degeneracy_tolerance : float
        ``|lambda_d - lambda_p|`` below which the secular-equilibrium limit
        replaces the two-member Bateman formula.
    quadrature_chunk : int
        Number of quadrature nodes evaluated per numpy batch.
    """

    time_steps: int = 1000
    max_time_step_s: float = 0.1
    radial_rings: int = 100
    max_ring_width_cm: float = 0.1
    stability_threshold: float = 0.2
    degeneracy_tolerance: float = 1e-12
    quadrature_chunk: int = 1_000_000

    def default_time_step(self, total_time: float) -> float:
        return min(total_time / self.time_steps, self.max_time_step_s)

    def default_ring_width(self, radius: float) -> float:
        return min(radius / self.radial_rings, self.max_ring_width_cm)


DEFAULT_INTEGRATION = IntegrationConfig()


@dataclass(frozen=True)
class EvaluatorConfig:
    """Defaults applied by :class:`~isoforge.evaluation.route_evaluator.RouteEvaluator`
    when operating conditions leave a quantity unspecified."""

    thermal_flux: float = 1e14
    fast_flux: float = 1e13
    target_mass_g: float = 1.0
    enrichment: float = 1.0
    irradiation_time_s: float = 86400.0
    neutron_energy_mev: float = DT_NEUTRON_ENERGY_MEV
    target_density_atoms_cm3: float = 5e22
    target_thickness_cm: float = 0.2
    default_chemistry_yield: float = 0.85
    min_product_mass_g: float = 1e-9
    low_reaction_rate: float = 1e6
    nca_specific_activity_bq_g: float = 1e12
    scale_threshold_cross_sections: bool = False


DEFAULT_EVALUATOR = EvaluatorConfig()
