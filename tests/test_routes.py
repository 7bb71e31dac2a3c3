import dataclasses

import pytest

from isoforge.constants import SECONDS_PER_DAY, SECONDS_PER_HOUR
from isoforge.data.routes import (
    CrossSection,
    CrossSectionUnit,
    OperatingConditions,
    ReactionType,
    conditions_from_dict,
    route_from_dict,
)
from isoforge.errors import InvalidParameterError, UnsupportedProfileError
from isoforge.physics.flux_profiles import DutyCycleFlux, GaussianProfile
from isoforge.physics.spatial_integration import TargetGeometry


@pytest.mark.parametrize(
    "notation, expected",
    [
        ("n,γ", ReactionType.CAPTURE),
        ("(n,gamma)", ReactionType.CAPTURE),
        ("n,2n", ReactionType.FAST_N2N),
        ("n,p", ReactionType.FAST_NP),
        ("n,alpha", ReactionType.FAST_NP),
        ("p,n", ReactionType.CHARGED_PARTICLE),
        ("d,2n", ReactionType.CHARGED_PARTICLE),
        ("capture", ReactionType.CAPTURE),
    ],
)
def test_reaction_notation(notation, expected):
    assert ReactionType.from_reaction(notation) is expected


def test_unrecognised_reaction_rejected():
    with pytest.raises(InvalidParameterError):
        ReactionType.from_reaction("fission")


class TestCrossSection:
    def test_barn_conversion(self):
        assert CrossSection(0.13, "barn").cm2 == pytest.approx(1.3e-25)

    def test_millibarn_conversion(self):
        assert CrossSection(250.0, "mb").cm2 == pytest.approx(2.5e-25)

    def test_bare_number_is_cm2(self):
        assert CrossSection.from_value(1e-24).unit is CrossSectionUnit.CM2

    def test_record(self):
        assert CrossSection.from_value({"value": 2, "unit": "b"}) == CrossSection(2.0, CrossSectionUnit.BARN)

    def test_unknown_unit(self):
        with pytest.raises(InvalidParameterError):
            CrossSection(1.0, "acre")

    def test_negative_value(self):
        with pytest.raises(InvalidParameterError):
            CrossSection(-1.0)


class TestRouteRecords:
    def test_capture_route(self):
        route = route_from_dict(
            {
                "id": "mo98-ng",
                "target_isotope": "Mo-98",
                "product_isotope": "Mo-99",
                "reaction": "n,gamma",
                "thermal_cross_section": {"value": 0.13, "unit": "barn"},
                "product_half_life_days": 2.75,
                "notes": "planning value",
            }
        )
        assert route.route_id == "mo98-ng"
        assert route.reaction_type is ReactionType.CAPTURE
        assert route.required_cross_section.cm2 == pytest.approx(1.3e-25)
        assert route.metadata == {"notes": "planning value"}
        assert not route.has_threshold

    def test_nominal_sigma_fills_fast_cross_section(self):
        route = route_from_dict(
            {
                "route_id": "zn68-np",
                "target_isotope": "Zn-68",
                "product_isotope": "Cu-67",
                "reaction": "n,p",
                "nominal_sigma_barns": 0.002,
                "threshold_MeV": 6.0,
                "product_half_life_days": 2.58,
            }
        )
        assert route.thermal_cross_section is None
        assert route.fast_cross_section.cm2 == pytest.approx(2e-27)
        assert route.threshold_mev == 6.0
        assert route.has_threshold

    def test_missing_fields(self):
        with pytest.raises(InvalidParameterError, match="product_half_life_days"):
            route_from_dict({"target_isotope": "Mo-98", "product_isotope": "Mo-99"})

    @pytest.mark.parametrize("chem_yield", [1.5, -0.1])
    def test_chemistry_yield_outside_unit_interval_rejected(self, chem_yield):
        with pytest.raises(InvalidParameterError, match="chemistry_yield"):
            route_from_dict(
                {
                    "target_isotope": "Mo-98",
                    "product_isotope": "Mo-99",
                    "product_half_life_days": 2.75,
                    "chemistry_yield": chem_yield,
                }
            )

    def test_routes_are_immutable(self):
        route = route_from_dict({"target_isotope": "Mo-98", "product_isotope": "Mo-99", "product_half_life_days": 2.75})
        with pytest.raises(dataclasses.FrozenInstanceError):
            route.product_half_life_days = 3.0


class TestConditions:
    def test_conventional_units(self):
        conditions = conditions_from_dict(
            {"thermal_flux": 1e14, "irradiation_time_days": 7, "chemistry_delay_hours": 2, "transport_time_hours": 1}
        )
        assert conditions.irradiation_time_s == 7 * SECONDS_PER_DAY
        assert conditions.chemistry_delay_s == 2 * SECONDS_PER_HOUR
        assert conditions.transport_s == SECONDS_PER_HOUR

    def test_profiles_and_geometry(self):
        conditions = conditions_from_dict(
            {
                "temporal_profile": {"type": "duty_cycle", "phi0": 1e13, "period": 10},
                "spatial_profile": {"type": "gaussian", "phi_center": 1e13, "sigma": 0.5},
                "geometry": "rectangular",
            }
        )
        assert conditions.temporal_profile == DutyCycleFlux(1e13, 10.0)
        assert conditions.spatial_profile == GaussianProfile(1e13, 0.5)
        assert conditions.geometry is TargetGeometry.RECTANGULAR

    def test_unknown_field(self):
        with pytest.raises(InvalidParameterError, match="flux_density"):
            conditions_from_dict({"flux_density": 1.0})

    def test_unknown_geometry(self):
        with pytest.raises(UnsupportedProfileError):
            conditions_from_dict({"geometry": "hexagon"})

    @pytest.mark.parametrize(
        "kwargs",
        [{"enrichment": 1.5}, {"thermal_flux": -1.0}, {"target_mass_g": 0.0}, {"self_shielding_factor": 2.0}],
    )
    def test_validation(self, kwargs):
        with pytest.raises(InvalidParameterError):
            OperatingConditions(**kwargs)
