"""Epithermal (resonance-integral) contribution to the reaction rate.

    R = N (σ_th φ_th + I_eff φ_epi) f_shield

``I_eff`` is the effective resonance integral already normalised to the
epithermal flux and expressed in cm². Values tabulated in barn must be
converted upstream with :func:`convert_resonance_integral`.
"""

from __future__ import annotations

import logging
import warnings

from isoforge.constants import BARN_TO_CM2
from isoforge.errors import PhysicsWarning, require_non_negative

logger = logging.getLogger(__name__)

# Physical effective resonance integrals sit around 1e-24 to 1e-22 cm².
RESONANCE_INTEGRAL_WARN_CM2 = 1e-20


def reaction_rate_with_epithermal(
    n_target: float,
    sigma_thermal_cm2: float,
    phi_thermal: float,
    resonance_integral_cm2: float,
    phi_epithermal: float,
    f_shield: float = 1.0,
) -> float:
    """Reaction rate with thermal and epithermal terms (reactions/s).

    Parameters
    ----------
    n_target : float
        Number of target atoms
    sigma_thermal_cm2 : float
        Thermal cross section (cm²)
    phi_thermal : float
        Thermal flux (cm⁻² s⁻¹)
    resonance_integral_cm2 : float
        Effective resonance integral (cm²), not barn·eV
    phi_epithermal : float
        Epithermal flux (cm⁻² s⁻¹)
    f_shield : float
        Self-shielding factor

    Returns
    -------
    float
        Reaction rate. A :class:`PhysicsWarning` is issued, without
        aborting, when the resonance integral exceeds 1e-20 cm² since that
        usually means a barn or barn·eV value was passed unconverted.
    """
    require_non_negative(
        n_target=n_target,
        sigma_thermal_cm2=sigma_thermal_cm2,
        phi_thermal=phi_thermal,
        resonance_integral_cm2=resonance_integral_cm2,
        phi_epithermal=phi_epithermal,
        f_shield=f_shield,
    )

    if resonance_integral_cm2 > RESONANCE_INTEGRAL_WARN_CM2:
        message = (
            f"Resonance integral {resonance_integral_cm2:.3e} cm^2 exceeds "
            f"{RESONANCE_INTEGRAL_WARN_CM2:.0e} cm^2; expected an effective value in cm^2 "
            "(typical 1e-24 to 1e-22). Check for an unconverted barn or barn*eV input."
        )
        logger.warning(message)
        warnings.warn(message, PhysicsWarning, stacklevel=2)

    r_thermal = n_target * sigma_thermal_cm2 * phi_thermal * f_shield
    r_epithermal = n_target * resonance_integral_cm2 * phi_epithermal * f_shield
    return r_thermal + r_epithermal


def convert_resonance_integral(i_res_barn: float) -> float:
    """Convert a tabulated resonance integral (barn) to an effective value in cm²."""
    require_non_negative(resonance_integral=i_res_barn)
    return i_res_barn * BARN_TO_CM2


__all__ = [
    "RESONANCE_INTEGRAL_WARN_CM2",
    "reaction_rate_with_epithermal",
    "convert_resonance_integral",
]
