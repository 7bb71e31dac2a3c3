"""Charged-particle beam relations and production derating factors."""

from __future__ import annotations

from isoforge.constants import ELEMENTARY_CHARGE_C, MEV_TO_J
from isoforge.errors import require_non_negative, require_positive


def particle_rate(current_a: float, charge_state: float = 1.0) -> float:
    """Particles per second delivered by a beam of current I and charge q (in e)."""
    require_non_negative(current_a=current_a)
    require_positive(charge_state=charge_state)
    return current_a / (charge_state * ELEMENTARY_CHARGE_C)


def beam_power(rate: float, energy_mev: float) -> float:
    """Beam power P = Ṅ E (W)."""
    require_non_negative(particle_rate=rate, energy_mev=energy_mev)
    return rate * energy_mev * MEV_TO_J


def temperature_rise(power_w: float, mass_flow_kg_s: float, cp_j_kg_k: float) -> float:
    """Coolant temperature rise ΔT = P / (ṁ c_p) (K)."""
    require_non_negative(power_w=power_w)
    require_positive(mass_flow_kg_s=mass_flow_kg_s, cp_j_kg_k=cp_j_kg_k)
    return power_w / (mass_flow_kg_s * cp_j_kg_k)


def thermal_derating(delta_t: float, delta_t_max: float) -> float:
    """1 when ΔT ≤ ΔT_max, otherwise ΔT_max / ΔT."""
    require_non_negative(delta_t=delta_t)
    require_positive(delta_t_max=delta_t_max)
    if delta_t <= delta_t_max:
        return 1.0
    return delta_t_max / delta_t


def damage_time_limit(dpa_limit: float, dpa_rate: float) -> float:
    """Time to reach the displacement-damage limit (s)."""
    require_non_negative(dpa_limit=dpa_limit)
    require_positive(dpa_rate=dpa_rate)
    return dpa_limit / dpa_rate


def damage_derating(t_irr_s: float, t_damage_s: float) -> float:
    """1 when the irradiation fits inside the damage limit, else t_damage / t_irr."""
    require_non_negative(t_irr_s=t_irr_s)
    require_positive(t_damage_s=t_damage_s)
    if t_irr_s <= t_damage_s:
        return 1.0
    return t_damage_s / t_irr_s


__all__ = [
    "particle_rate",
    "beam_power",
    "temperature_rise",
    "thermal_derating",
    "damage_time_limit",
    "damage_derating",
]
