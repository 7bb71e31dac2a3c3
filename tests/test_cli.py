import json

import pytest

from isoforge.cli.app import build_parser, main
from isoforge.errors import InvalidParameterError

MO_ROUTE = {
    "id": "mo98-ng-mo99",
    "target_isotope": "Mo-98",
    "product_isotope": "Mo-99",
    "reaction": "n,gamma",
    "thermal_cross_section": {"value": 0.13, "unit": "barn"},
    "product_half_life_days": 2.75,
}

LU_ROUTE = {
    "id": "lu176-ng-lu177",
    "target_isotope": "Lu-176",
    "product_isotope": "Lu-177",
    "reaction": "n,gamma",
    "nominal_sigma_barns": 2090,
    "product_half_life_days": 6.65,
    "chemistry_yield": 0.9,
}

CONDITIONS = {"thermal_flux": 1e14, "target_mass_g": 1.0, "irradiation_time_days": 7}


@pytest.fixture
def inputs(tmp_path):
    route = tmp_path / "route.json"
    route.write_text(json.dumps(MO_ROUTE))
    routes = tmp_path / "routes.json"
    routes.write_text(json.dumps([MO_ROUTE, LU_ROUTE]))
    conditions = tmp_path / "conditions.json"
    conditions.write_text(json.dumps(CONDITIONS))
    uncertainties = tmp_path / "uncertainties.json"
    uncertainties.write_text(
        json.dumps({"thermal_flux": {"type": "normal", "std": 1e13}, "cross_section_scale": {"type": "uniform", "range": [0.8, 1.2]}})
    )
    return {"route": route, "routes": routes, "conditions": conditions, "uncertainties": uncertainties}


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_evaluate_writes_json(inputs, tmp_path):
    out = tmp_path / "result.json"
    main(["evaluate", "--route", str(inputs["route"]), "--conditions", str(inputs["conditions"]), "--output", str(out)])
    data = json.loads(out.read_text())
    assert data["route_id"] == "mo98-ng-mo99"
    assert data["activity_bq"] > 0
    assert data["classification"] == "Feasible"


def test_evaluate_many_prints_list(inputs, capsys):
    main(["evaluate", "--route", str(inputs["routes"]), "--conditions", str(inputs["conditions"])])
    data = json.loads(capsys.readouterr().out)
    assert [d["route_id"] for d in data] == ["mo98-ng-mo99", "lu176-ng-lu177"]


def test_evaluate_summary(inputs, capsys):
    main(["evaluate", "--route", str(inputs["route"]), "--summary", "--output", str(inputs["route"].with_name("o.json"))])
    assert "ROUTE EVALUATION: mo98-ng-mo99" in capsys.readouterr().out


def test_monte_carlo_is_seeded(inputs, tmp_path):
    outputs = []
    for name in ("a.json", "b.json"):
        out = tmp_path / name
        main(
            [
                "monte-carlo",
                "--route", str(inputs["route"]),
                "--conditions", str(inputs["conditions"]),
                "--uncertainties", str(inputs["uncertainties"]),
                "--samples", "50",
                "--seed", "11",
                "--output", str(out),
            ]
        )
        outputs.append(json.loads(out.read_text()))
    assert outputs[0] == outputs[1]
    data = outputs[0]
    assert data["n_samples"] == 50
    assert set(data["percentiles"]) == {"p5", "p25", "p50", "p75", "p95"}
    assert data["percentiles"]["p5"] <= data["percentiles"]["p95"]


def test_monte_carlo_needs_route_id_for_several_routes(inputs):
    with pytest.raises(InvalidParameterError):
        main(["monte-carlo", "--route", str(inputs["routes"]), "--uncertainties", str(inputs["uncertainties"])])


def test_budget_table(inputs, capsys):
    main(["budget", "--route", str(inputs["routes"]), "--route-id", "lu176-ng-lu177", "--conditions", str(inputs["conditions"])])
    out = capsys.readouterr().out
    assert "Uncertainty Budget: lu176-ng-lu177" in out
    assert "cross_section" in out
