import pytest

from isoforge.data.atomic_masses import (
    DEFAULT_REGISTRY,
    FALLBACK_ATOMIC_MASS_AMU,
    AtomicMassRegistry,
    element_symbol,
    parse_formula,
    parse_isotope,
)
from isoforge.errors import InvalidParameterError, PhysicsWarning


class TestRegistry:
    def test_known_element(self):
        result = DEFAULT_REGISTRY.lookup("Lu")
        assert result.mass_amu == 174.9668
        assert result.found
        assert not result.is_fallback

    def test_isotope_lookup_uses_element(self):
        assert DEFAULT_REGISTRY.lookup_isotope("Mo-98").mass_amu == 95.95

    def test_unknown_element_falls_back_observably(self):
        with pytest.warns(PhysicsWarning, match="placeholder"):
            result = DEFAULT_REGISTRY.lookup("Xx")
        assert result.mass_amu == FALLBACK_ATOMIC_MASS_AMU == 100.0
        assert result.is_fallback

    def test_unparseable_isotope_falls_back(self):
        with pytest.warns(PhysicsWarning):
            assert not DEFAULT_REGISTRY.lookup_isotope("177Lu").found

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_REGISTRY["Lu"] = 1.0

    def test_synthetic_registry(self):
        registry = AtomicMassRegistry({"Zz": 50.0}, fallback_amu=42.0)
        assert len(registry) == 1
        assert registry["Zz"] == 50.0
        assert "Lu" not in registry
        with pytest.warns(PhysicsWarning):
            assert registry.lookup("Lu").mass_amu == 42.0

    def test_non_positive_mass_rejected(self):
        with pytest.raises(InvalidParameterError):
            AtomicMassRegistry({"Zz": -1.0})


class TestParsing:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("Lu-177", ("Lu", 177, 0)),
            ("Tc-99m", ("Tc", 99, 1)),
            ("Mo100", ("Mo", 100, 0)),
            ("Sn-117m2", ("Sn", 117, 2)),
        ],
    )
    def test_parse_isotope(self, name, expected):
        assert parse_isotope(name) == expected

    def test_parse_isotope_rejects_garbage(self):
        with pytest.raises(InvalidParameterError):
            parse_isotope("lutetium")

    def test_element_symbol(self):
        assert element_symbol("Lu-177") == "Lu"
        assert element_symbol("177Lu") is None

    def test_parse_formula(self):
        assert parse_formula("Lu2O3") == {"Lu": 2, "O": 3}
        assert parse_formula("MoO3") == {"Mo": 1, "O": 3}

    def test_parse_formula_rejects_lowercase(self):
        with pytest.raises(InvalidParameterError):
            parse_formula("lu2o3")


def test_compound_mass_per_target_atom():
    result = DEFAULT_REGISTRY.compound_mass_per_atom("Lu2O3", "Lu")
    assert result.mass_amu == pytest.approx((2 * 174.9668 + 3 * 15.999) / 2)
    assert result.found


def test_compound_without_element_rejected():
    with pytest.raises(InvalidParameterError):
        DEFAULT_REGISTRY.compound_mass_per_atom("MoO3", "Lu")
