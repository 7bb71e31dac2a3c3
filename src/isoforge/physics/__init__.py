"""IsoForge physics module."""

from isoforge.physics.activation import (
    activity,
    atoms_at_eob,
    atoms_at_eob_with_burnup,
    decay_constant,
    reaction_rate,
    saturation_factor,
    specific_activity,
    target_atoms,
    threshold_cross_section,
)
from isoforge.physics.decay_chain import (
    DecayBranch,
    DecayNetwork,
    Nuclide,
    bateman_one_step,
    plan_time_steps,
    solve_chain,
    solve_explicit,
)
from isoforge.physics.epithermal import reaction_rate_with_epithermal
from isoforge.physics.flux_profiles import (
    ConstantFlux,
    DutyCycleFlux,
    GaussianProfile,
    InverseSquareProfile,
    RampFlux,
    StepFlux,
    UniformProfile,
    flux_at_radius,
    flux_at_time,
)
from isoforge.physics.geometry import (
    flux_from_solid_angle,
    geometric_efficiency,
    self_shielding_factor,
    solid_angle,
)
from isoforge.physics.spatial_integration import (
    TargetGeometry,
    atoms_at_eob_spatial,
    reaction_rate_spatial,
)
from isoforge.physics.time_integration import atoms_at_eob_time_varying, mean_flux

__all__ = [
    # activation
    "decay_constant",
    "saturation_factor",
    "reaction_rate",
    "atoms_at_eob",
    "activity",
    "specific_activity",
    "target_atoms",
    "atoms_at_eob_with_burnup",
    "threshold_cross_section",
    # geometry
    "solid_angle",
    "geometric_efficiency",
    "flux_from_solid_angle",
    "self_shielding_factor",
    # decay chains
    "bateman_one_step",
    "Nuclide",
    "DecayBranch",
    "DecayNetwork",
    "plan_time_steps",
    "solve_explicit",
    "solve_chain",
    # flux profiles
    "ConstantFlux",
    "DutyCycleFlux",
    "RampFlux",
    "StepFlux",
    "UniformProfile",
    "GaussianProfile",
    "InverseSquareProfile",
    "flux_at_time",
    "flux_at_radius",
    # integrators
    "atoms_at_eob_time_varying",
    "atoms_at_eob_spatial",
    "reaction_rate_spatial",
    "mean_flux",
    "TargetGeometry",
    # epithermal
    "reaction_rate_with_epithermal",
]
