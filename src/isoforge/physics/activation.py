"""Activation and decay relationships for radioisotope production.

Closed-form solutions of the activation equation

    dN/dt = R - λ N

for constant flux, plus the burn-up extension used when the product is
itself consumed by neutron capture.
All quantities are SI-like planning units: seconds, cm², cm⁻² s⁻¹, grams.
"""

from __future__ import annotations

import math

from isoforge.constants import DT_NEUTRON_ENERGY_MEV, LN2, N_AVOGADRO, SECONDS_PER_DAY
from isoforge.errors import (
    InvalidParameterError,
    require_fraction,
    require_non_negative,
    require_positive,
)
from isoforge.physics.geometry import self_shielding_factor

_F_SAT_MAX = math.nextafter(1.0, 0.0)


# =============================================================================
# Core definitions
# =============================================================================


def decay_constant(half_life_days: float) -> float:
    """Decay constant λ = ln2 / (T½ · 86400) in s⁻¹."""
    require_positive(half_life_days=half_life_days)
    return LN2 / (half_life_days * SECONDS_PER_DAY)


def saturation_factor(decay_const: float, t_irr_s: float) -> float:
    """Saturation factor f_sat = 1 − exp(−λ t), in [0, 1).

    For λ t beyond about 37 the difference from 1 is below double
    precision; the result is then held at the largest double below 1.
    """
    require_non_negative(decay_constant=decay_const, irradiation_time=t_irr_s)
    return min(1.0 - math.exp(-decay_const * t_irr_s), _F_SAT_MAX)


def reaction_rate(n_target: float, sigma_cm2: float, phi: float, f_shield: float = 1.0) -> float:
    """Reaction rate R = N σ φ f_shield (reactions/s)."""
    require_non_negative(n_target=n_target, sigma_cm2=sigma_cm2, phi=phi, f_shield=f_shield)
    return n_target * sigma_cm2 * phi * f_shield


def atoms_at_eob(rate: float, f_sat: float, decay_const: float) -> float:
    """Product atoms at end of bombardment, N_EOB = R f_sat / λ."""
    require_non_negative(reaction_rate=rate)
    require_fraction(saturation_factor=f_sat)
    require_positive(decay_constant=decay_const)
    return rate * f_sat / decay_const


def activity(decay_const: float, n_atoms: float) -> float:
    """Activity A = λ N (Bq)."""
    require_non_negative(decay_constant=decay_const, n_atoms=n_atoms)
    return decay_const * n_atoms


def specific_activity(activity_bq: float, mass_g: float) -> float:
    """Specific activity A / m (Bq/g)."""
    require_positive(mass_g=mass_g)
    return activity_bq / mass_g


def target_atoms(mass_g: float, atomic_mass_amu: float, enrichment: float = 1.0) -> float:
    """Number of target atoms N = m N_A ε / A."""
    require_non_negative(mass_g=mass_g)
    require_positive(atomic_mass_amu=atomic_mass_amu)
    require_fraction(enrichment=enrichment)
    return mass_g * N_AVOGADRO * enrichment / atomic_mass_amu


def macroscopic_cross_section(n_density: float, sigma_cm2: float) -> float:
    """Macroscopic cross section Σ = N σ (cm⁻¹)."""
    require_non_negative(n_density=n_density, sigma_cm2=sigma_cm2)
    return n_density * sigma_cm2


# =============================================================================
# Burn-up
# =============================================================================


def burn_up_rate_constant(phi: float, sigma_burn_cm2: float) -> float:
    """Burn-up rate constant k = φ σ_burn (s⁻¹)."""
    require_non_negative(phi=phi, sigma_burn_cm2=sigma_burn_cm2)
    return phi * sigma_burn_cm2


def effective_decay_constant(decay_const: float, k_burn: float) -> float:
    require_non_negative(decay_constant=decay_const, k_burn=k_burn)
    return decay_const + k_burn


def saturation_factor_with_burnup(decay_const: float, k_burn: float, t_irr_s: float) -> float:
    """Saturation factor using λ_eff = λ + k_burn."""
    lam_eff = effective_decay_constant(decay_const, k_burn)
    return saturation_factor(lam_eff, t_irr_s)


def atoms_at_eob_with_burnup(rate: float, decay_const: float, k_burn: float, t_irr_s: float) -> float:
    """Atoms at EOB when the product is also removed by neutron capture.

    N_EOB = R (1 − exp(−λ_eff t)) / λ_eff with λ_eff = λ + k_burn.
    """
    require_non_negative(reaction_rate=rate, irradiation_time=t_irr_s)
    lam_eff = effective_decay_constant(decay_const, k_burn)
    if lam_eff <= 0:
        raise InvalidParameterError("Effective decay constant must be positive")
    f_sat = saturation_factor(lam_eff, t_irr_s)
    return rate * f_sat / lam_eff


def product_burnup_rate(
    phi: float,
    sigma_burn_cm2: float,
    product_density: float,
    thickness_cm: float,
) -> float:
    """Product burn-up rate constant including self-shielding by the product.

    The burn-up channel sees the same depressed flux as the production
    channel, so k = φ σ_burn G(Σ_prod t) with Σ_prod = N_prod σ_burn.
    """
    sigma_macro = macroscopic_cross_section(product_density, sigma_burn_cm2)
    f_shield = self_shielding_factor(sigma_macro, thickness_cm)
    return burn_up_rate_constant(phi, sigma_burn_cm2) * f_shield


# =============================================================================
# Threshold reactions
# =============================================================================


def threshold_cross_section(
    energy_mev: float,
    threshold_mev: float,
    sigma: float,
    scale_with_energy: bool = False,
    reaction: str = "n,p",
) -> float:
    """Effective cross section for a threshold reaction.

    The default is a conservative step function: zero below threshold and
    the tabulated value above it. With ``scale_with_energy`` the value
    between threshold and the 14.1 MeV reference is scaled as
    ((E − E_thr) / (14.1 − E_thr))ⁿ with n = 2.0 for (n,2n) and 1.5 otherwise.
    The returned value carries the same unit as ``sigma``.
    """
    require_non_negative(energy_mev=energy_mev, threshold_mev=threshold_mev, sigma=sigma)
    if energy_mev < threshold_mev:
        return 0.0
    if not scale_with_energy or energy_mev >= DT_NEUTRON_ENERGY_MEV:
        return sigma

    exponent = 2.0 if reaction.replace("(", "").replace(")", "") == "n,2n" else 1.5
    ratio = (energy_mev - threshold_mev) / (DT_NEUTRON_ENERGY_MEV - threshold_mev)
    if ratio <= 0:
        return 0.0
    return sigma * ratio**exponent


__all__ = [
    "decay_constant",
    "saturation_factor",
    "reaction_rate",
    "atoms_at_eob",
    "activity",
    "specific_activity",
    "target_atoms",
    "macroscopic_cross_section",
    "burn_up_rate_constant",
    "effective_decay_constant",
    "saturation_factor_with_burnup",
    "atoms_at_eob_with_burnup",
    "product_burnup_rate",
    "threshold_cross_section",
]
