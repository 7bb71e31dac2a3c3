"""Tests for route evaluation."""

import json
import math

import pytest

from isoforge.constants import ELEMENTARY_CHARGE_C, N_AVOGADRO, SECONDS_PER_DAY
from isoforge.data.atomic_masses import AtomicMassRegistry
from isoforge.data.routes import CrossSection, OperatingConditions, ReactionRoute, ReactionType
from isoforge.errors import InvalidParameterError, MissingDataError, PhysicsWarning
from isoforge.evaluation.route_evaluator import Feasibility, RouteEvaluator
from isoforge.physics.activation import product_burnup_rate
from isoforge.physics.flux_profiles import ConstantFlux, UniformProfile


def _mo99_route(**overrides):
    fields = dict(
        route_id="mo98-ng-mo99",
        target_isotope="Mo-98",
        product_isotope="Mo-99",
        reaction_type=ReactionType.CAPTURE,
        product_half_life_days=2.75,
        thermal_cross_section=CrossSection(0.13, "barn"),
    )
    fields.update(overrides)
    return ReactionRoute(**fields)


def _fast_route(**overrides):
    fields = dict(
        route_id="zn67-np-cu67",
        target_isotope="Zn-67",
        product_isotope="Cu-67",
        reaction_type=ReactionType.FAST_NP,
        product_half_life_days=2.58,
        fast_cross_section=CrossSection(0.05, "barn"),
        threshold_mev=5.0,
    )
    fields.update(overrides)
    return ReactionRoute(**fields)


@pytest.fixture
def evaluator():
    return RouteEvaluator()


@pytest.fixture
def mo_conditions():
    return OperatingConditions(
        thermal_flux=1e14,
        target_mass_g=1.0,
        enrichment=1.0,
        irradiation_time_s=7 * SECONDS_PER_DAY,
    )


# =============================================================================
# Constant-flux capture
# =============================================================================


class TestMo99Scenario:
    def test_activity_matches_closed_form(self, evaluator, mo_conditions):
        result = evaluator.evaluate(_mo99_route(), mo_conditions)

        lam = math.log(2) / (2.75 * 86400.0)
        rate = N_AVOGADRO / 95.95 * 1.3e-25 * 1e14
        expected = rate * (1.0 - math.exp(-lam * 7 * 86400.0))

        assert result.reaction_rate == pytest.approx(rate, rel=1e-12)
        assert result.activity_bq == pytest.approx(expected, rel=1e-12)
        assert result.cross_section_cm2 == pytest.approx(1.3e-25)
        assert result.effective_flux == 1e14
        assert result.saturation_factor == pytest.approx(1.0 - math.exp(-lam * 7 * 86400.0))
        assert not result.mass_fallback_used

    def test_classified_feasible(self, evaluator, mo_conditions):
        result = evaluator.evaluate(_mo99_route(), mo_conditions)
        assert result.activity_gbq > 1.0
        assert result.feasible
        assert result.classification is Feasibility.FEASIBLE
        assert result.reasons == ()

    def test_default_chemistry_yield_applied_and_reported(self, evaluator, mo_conditions):
        result = evaluator.evaluate(_mo99_route(), mo_conditions)
        assert result.delivered_activity_bq == pytest.approx(0.85 * result.activity_bq)
        assert any("chemistry yield" in w for w in result.warnings)

    def test_delay_and_transport_decay_activity(self, evaluator):
        conditions = OperatingConditions(
            thermal_flux=1e14, irradiation_time_s=SECONDS_PER_DAY, chemistry_delay_s=2.75 * SECONDS_PER_DAY
        )
        result = evaluator.evaluate(_mo99_route(chemistry_yield=1.0), conditions)
        assert result.delivered_activity_bq == pytest.approx(0.5 * result.activity_bq)

    def test_specific_activity_without_carrier(self, evaluator, mo_conditions):
        result = evaluator.evaluate(_mo99_route(), mo_conditions)
        product_mass = result.atoms_eob * 95.95 / N_AVOGADRO
        assert result.specific_activity_bq_g == pytest.approx(result.activity_bq / product_mass, rel=1e-6)

    def test_route_and_conditions_are_unchanged(self, evaluator, mo_conditions):
        route = _mo99_route()
        first = evaluator.evaluate(route, mo_conditions)
        second = evaluator.evaluate(route, mo_conditions)
        assert first == second
        assert route == _mo99_route()

    def test_result_serialises_to_json(self, evaluator, mo_conditions):
        data = json.loads(json.dumps(evaluator.evaluate(_mo99_route(), mo_conditions).to_dict()))
        assert data["classification"] == "Feasible"
        assert data["delivery"]["chemistry_yield"] == 0.85

    def test_summary_mentions_route(self, evaluator, mo_conditions):
        assert "mo98-ng-mo99" in evaluator.evaluate(_mo99_route(), mo_conditions).summary()


def test_missing_cross_section_raises(evaluator):
    with pytest.raises(MissingDataError):
        evaluator.evaluate(_mo99_route(thermal_cross_section=None))


def test_placeholder_mass_is_observable():
    evaluator = RouteEvaluator(masses=AtomicMassRegistry({"Mo": 95.95}))
    route = _mo99_route(target_isotope="Xx-10")
    with pytest.warns(PhysicsWarning):
        result = evaluator.evaluate(route, OperatingConditions(thermal_flux=1e14))
    assert result.mass_fallback_used
    assert any("placeholder" in w for w in result.warnings)
    expected_rate = N_AVOGADRO / 100.0 * 1.3e-25 * 1e14
    assert result.reaction_rate == pytest.approx(expected_rate, rel=1e-12)


def test_compound_target_mass(evaluator):
    route = _mo99_route(target_compound="MoO3")
    result = evaluator.evaluate(route, OperatingConditions(thermal_flux=1e14))
    mass_per_atom = 95.95 + 3 * 15.999
    assert result.reaction_rate == pytest.approx(N_AVOGADRO / mass_per_atom * 1.3e-25 * 1e14, rel=1e-12)


# =============================================================================
# Fast-neutron and charged-particle routes
# =============================================================================


class TestThresholdRoutes:
    def test_below_threshold_not_recommended(self, evaluator):
        result = evaluator.evaluate(_fast_route(), OperatingConditions(energy_mev=2.0))
        assert result.activity_bq == 0.0
        assert not result.feasible
        assert result.classification is Feasibility.NOT_RECOMMENDED
        assert "below reaction threshold" in result.reasons[0]

    def test_above_threshold_uses_fast_flux(self, evaluator):
        result = evaluator.evaluate(_fast_route())
        assert result.cross_section_cm2 == pytest.approx(5e-26)
        assert result.effective_flux == 1e13
        assert result.activity_bq > 0.0


class TestChargedParticle:
    def test_flux_from_beam_current(self, evaluator):
        route = _fast_route(
            route_id="zn68-pn-ga68",
            target_isotope="Zn-68",
            product_isotope="Ga-68",
            reaction_type=ReactionType.CHARGED_PARTICLE,
            product_half_life_days=0.047,
            threshold_mev=None,
        )
        conditions = OperatingConditions(beam_current_a=1e-6, beam_area_cm2=1.0, irradiation_time_s=3600.0)
        result = evaluator.evaluate(route, conditions)
        assert result.effective_flux == pytest.approx(1e-6 / ELEMENTARY_CHARGE_C)

    def test_missing_beam_parameters(self, evaluator):
        route = _fast_route(reaction_type=ReactionType.CHARGED_PARTICLE, threshold_mev=None)
        with pytest.raises(InvalidParameterError):
            evaluator.evaluate(route, OperatingConditions())


# =============================================================================
# Flux profiles
# =============================================================================


class TestProfiles:
    def test_constant_temporal_profile_matches_scalar(self, evaluator):
        route = _mo99_route(product_half_life_days=0.1, chemistry_yield=1.0)
        scalar = evaluator.evaluate(route, OperatingConditions(thermal_flux=1e14, irradiation_time_s=3600.0))
        profiled = evaluator.evaluate(
            route, OperatingConditions(temporal_profile=ConstantFlux(1e14), irradiation_time_s=3600.0)
        )
        assert profiled.activity_bq == pytest.approx(scalar.activity_bq, rel=1e-6)
        assert profiled.effective_flux == pytest.approx(1e14)

    def test_uniform_spatial_profile_matches_disk(self, evaluator):
        route = _mo99_route(product_half_life_days=0.1)
        conditions = OperatingConditions(
            spatial_profile=UniformProfile(1e13),
            target_radius_cm=1.0,
            target_thickness_cm=0.2,
            target_density_atoms_cm3=5e22,
            irradiation_time_s=3600.0,
        )
        result = evaluator.evaluate(route, conditions)
        lam = math.log(2) / (0.1 * 86400.0)
        n_target = 5e22 * math.pi * 1.0**2 * 0.2
        expected = n_target * 1.3e-25 * 1e13 * (1.0 - math.exp(-lam * 3600.0))
        assert result.activity_bq == pytest.approx(expected, rel=1e-9)
        assert result.effective_flux == pytest.approx(1e13, rel=1e-9)

    def test_spatial_burnup_uses_disk_volume(self, evaluator):
        route = _mo99_route(product_half_life_days=0.1, burnup_cross_section=CrossSection(1e-16))
        conditions = OperatingConditions(
            spatial_profile=UniformProfile(1e13),
            target_radius_cm=1.0,
            target_thickness_cm=0.2,
            target_density_atoms_cm3=5e22,
            irradiation_time_s=3600.0,
        )
        result = evaluator.evaluate(route, conditions)
        lam = math.log(2) / (0.1 * 86400.0)
        n_product = result.reaction_rate * (1.0 - math.exp(-lam * 3600.0)) / lam
        disk_volume = math.pi * 1.0**2 * 0.2
        expected = product_burnup_rate(result.effective_flux, 1e-16, min(n_product / disk_volume, 5e22), 0.2)
        assert result.burnup_rate_constant == pytest.approx(expected, rel=1e-9)

    def test_combined_profiles_rejected(self, evaluator):
        conditions = OperatingConditions(
            temporal_profile=ConstantFlux(1e14), spatial_profile=UniformProfile(1e14), target_radius_cm=1.0
        )
        with pytest.raises(InvalidParameterError):
            evaluator.evaluate(_mo99_route(), conditions)

    def test_spatial_profile_needs_radius(self, evaluator):
        with pytest.raises(InvalidParameterError):
            evaluator.evaluate(_mo99_route(), OperatingConditions(spatial_profile=UniformProfile(1e14)))


# =============================================================================
# Burn-up, epithermal, chemistry
# =============================================================================


def test_burnup_lowers_activity(evaluator, mo_conditions):
    plain = evaluator.evaluate(_mo99_route(), mo_conditions)
    burned = evaluator.evaluate(_mo99_route(burnup_cross_section=CrossSection(1e-21)), mo_conditions)
    assert burned.burnup_rate_constant == pytest.approx(1e14 * 1e-21, rel=1e-3)
    assert burned.activity_bq < plain.activity_bq
    assert burned.saturation_factor > plain.saturation_factor


def test_epithermal_term_added_for_capture(evaluator):
    route = _mo99_route(resonance_integral=CrossSection(1e-23))
    conditions = OperatingConditions(thermal_flux=1e14, epithermal_flux=1e12)
    result = evaluator.evaluate(route, conditions)
    n_target = N_AVOGADRO / 95.95
    assert result.reaction_rate == pytest.approx(n_target * (1.3e-25 * 1e14 + 1e-23 * 1e12), rel=1e-12)


def test_overstated_chemistry_yield_rejected():
    with pytest.raises(InvalidParameterError, match="chemistry_yield"):
        _mo99_route(chemistry_yield=1.5)


def test_stated_chemistry_yield_applied(evaluator, mo_conditions):
    result = evaluator.evaluate(_mo99_route(chemistry_yield=0.6), mo_conditions)
    assert result.delivered_activity_bq == pytest.approx(0.6 * result.activity_bq)
    assert not any("chemistry yield" in w.lower() for w in result.warnings)


def test_inseparable_product_rejected(evaluator, mo_conditions):
    result = evaluator.evaluate(_mo99_route(chemical_separable=False), mo_conditions)
    assert result.classification is Feasibility.NOT_RECOMMENDED
    assert "inseparable" in result.reasons[0]


def test_carrier_mass_in_specific_activity(evaluator, mo_conditions):
    route = _mo99_route(carrier_added_acceptable=True, carrier_mass_g=2.0)
    result = evaluator.evaluate(route, mo_conditions)
    assert result.specific_activity_bq_g == pytest.approx(result.activity_bq / 2.0, rel=1e-5)


# =============================================================================
# Classification
# =============================================================================


def test_application_context_changes_classification(evaluator):
    small = dict(thermal_flux=1e14, target_mass_g=1e-5, irradiation_time_s=7 * SECONDS_PER_DAY)
    medical = evaluator.evaluate(_mo99_route(), OperatingConditions(**small))
    research = evaluator.evaluate(_mo99_route(), OperatingConditions(application_context="research", **small))
    assert medical.classification is Feasibility.NOT_RECOMMENDED
    assert research.classification is Feasibility.CONSTRAINED
    assert research.feasible


def test_exploratory_route_constrained(evaluator, mo_conditions):
    result = evaluator.evaluate(_mo99_route(regulatory_flag="exploratory"), mo_conditions)
    assert result.classification is Feasibility.CONSTRAINED
    assert "Exploratory" in result.reasons[0]


def test_evaluate_many(evaluator, mo_conditions):
    results = evaluator.evaluate_many([_mo99_route(), _mo99_route(route_id="second")], mo_conditions)
    assert [r.route_id for r in results] == ["mo98-ng-mo99", "second"]


# =============================================================================
# Monte Carlo kernel
# =============================================================================


class TestKernel:
    def test_nominal_reproduces_evaluation(self, evaluator, mo_conditions):
        route = _mo99_route()
        kernel = evaluator.kernel(route, mo_conditions)
        nominal = evaluator.nominal_parameters(route, mo_conditions)
        assert nominal["thermal_flux"] == 1e14
        assert kernel(nominal) == pytest.approx(evaluator.evaluate(route, mo_conditions).activity_bq, rel=1e-12)

    def test_cross_section_scale(self, evaluator, mo_conditions):
        route = _mo99_route()
        kernel = evaluator.kernel(route, mo_conditions)
        nominal = evaluator.nominal_parameters(route, mo_conditions)
        assert kernel({**nominal, "cross_section_scale": 2.0}) == pytest.approx(2.0 * kernel(nominal), rel=1e-12)

    def test_other_output(self, evaluator, mo_conditions):
        kernel = evaluator.kernel(_mo99_route(), mo_conditions, output="saturation_factor")
        assert 0.0 < kernel({}) < 1.0

    def test_unknown_parameter(self, evaluator, mo_conditions):
        kernel = evaluator.kernel(_mo99_route(), mo_conditions)
        with pytest.raises(InvalidParameterError):
            kernel({"colour": 1.0})

    def test_unknown_output(self, evaluator):
        with pytest.raises(InvalidParameterError):
            evaluator.kernel(_mo99_route(), output="route_id")
