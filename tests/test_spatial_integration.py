import math

import numpy as np
import pytest

from isoforge.constants import LN2
from isoforge.errors import InvalidParameterError, UnsupportedGeometryError, UnsupportedProfileError
from isoforge.physics.activation import saturation_factor
from isoforge.physics.flux_profiles import GaussianProfile, InverseSquareProfile, UniformProfile
from isoforge.physics.spatial_integration import (
    TargetGeometry,
    atoms_at_eob_spatial,
    reaction_rate_spatial,
    ring_edges,
)

DENSITY = 5e22
SIGMA = 1e-24
THICKNESS = 0.2
PHI = 1e13
LAMBDA = LN2 / 3600.0


def test_ring_edges_end_at_radius():
    edges = ring_edges(1.0, 0.3)
    assert edges == pytest.approx([0.0, 0.3, 0.6, 0.9, 1.0])
    assert ring_edges(1.0, 0.25).size == 5


@pytest.mark.parametrize("radius", [0.5, 1.0, 2.5])
def test_uniform_profile_matches_whole_disk(radius):
    t_irr = 1800.0
    atoms = atoms_at_eob_spatial(DENSITY, SIGMA, UniformProfile(PHI), 1.0, radius, THICKNESS, LAMBDA, t_irr)
    n_target = DENSITY * math.pi * radius**2 * THICKNESS
    expected = n_target * SIGMA * PHI * saturation_factor(LAMBDA, t_irr) / LAMBDA
    assert atoms == pytest.approx(expected, rel=1e-10)


def test_uneven_ring_width_still_exact_for_uniform():
    rate = reaction_rate_spatial(DENSITY, SIGMA, UniformProfile(PHI), 0.8, 1.0, THICKNESS, dr=0.3)
    assert rate == pytest.approx(DENSITY * math.pi * THICKNESS * SIGMA * PHI * 0.8, rel=1e-12)


def test_gaussian_profile_matches_analytic_integral():
    sigma_r, radius = 1.0, 2.0
    rate = reaction_rate_spatial(DENSITY, SIGMA, GaussianProfile(PHI, sigma_r), 1.0, radius, THICKNESS)
    flux_area = 2.0 * math.pi * sigma_r**2 * PHI * (1.0 - math.exp(-(radius**2) / (2.0 * sigma_r**2)))
    assert rate == pytest.approx(DENSITY * THICKNESS * SIGMA * flux_area, rel=1e-3)


def test_inverse_square_profile_matches_analytic_integral():
    r0, radius = 0.5, 2.0
    rate = reaction_rate_spatial(DENSITY, SIGMA, InverseSquareProfile(PHI, r0), 1.0, radius, THICKNESS)
    flux_area = math.pi * r0**2 * PHI + 2.0 * math.pi * PHI * r0**2 * math.log(radius / r0)
    assert rate == pytest.approx(DENSITY * THICKNESS * SIGMA * flux_area, rel=1e-3)


def test_rectangular_target_unsupported():
    with pytest.raises(UnsupportedGeometryError):
        atoms_at_eob_spatial(
            DENSITY, SIGMA, UniformProfile(PHI), 1.0, 1.0, THICKNESS, LAMBDA, 10.0, geometry="rectangular"
        )


def test_unknown_geometry_tag():
    with pytest.raises(UnsupportedProfileError):
        TargetGeometry.parse("hexagon")
    with pytest.raises(ValueError):
        reaction_rate_spatial(DENSITY, SIGMA, UniformProfile(PHI), 1.0, 1.0, THICKNESS, geometry="hexagon")


def test_stable_product_rejected():
    with pytest.raises(InvalidParameterError):
        atoms_at_eob_spatial(DENSITY, SIGMA, UniformProfile(PHI), 1.0, 1.0, THICKNESS, 0.0, 10.0)


def test_zero_radius_rejected():
    with pytest.raises(InvalidParameterError):
        reaction_rate_spatial(DENSITY, SIGMA, UniformProfile(PHI), 1.0, 0.0, THICKNESS)


def test_finer_rings_do_not_change_uniform_result():
    coarse = reaction_rate_spatial(DENSITY, SIGMA, UniformProfile(PHI), 1.0, 1.0, THICKNESS, dr=0.5)
    fine = reaction_rate_spatial(DENSITY, SIGMA, UniformProfile(PHI), 1.0, 1.0, THICKNESS, dr=0.001)
    assert np.isclose(coarse, fine, rtol=1e-10)
