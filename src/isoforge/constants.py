"""Physical constants and unit conversions used throughout IsoForge."""

from __future__ import annotations

import math

# =============================================================================
# Physical Constants
# =============================================================================

# Avogadro's number (atoms/mol)
N_AVOGADRO = 6.02214076e23

# Atomic mass unit (g)
ATOMIC_MASS_UNIT_G = 1.66053906660e-24

# Elementary charge (C)
ELEMENTARY_CHARGE_C = 1.602176634e-19

# MeV to J
MEV_TO_J = 1.602176634e-13

LN2 = math.log(2.0)

SECONDS_PER_DAY = 86400.0
SECONDS_PER_HOUR = 3600.0

# Reference energy for fast-neutron cross-section tables (MeV)
DT_NEUTRON_ENERGY_MEV = 14.1

# =============================================================================
# Unit conversions
# =============================================================================

BARN_TO_CM2 = 1.0e-24
MILLIBARN_TO_CM2 = 1.0e-27
