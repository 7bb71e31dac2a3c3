"""Command-line interface for IsoForge using argparse."""

from __future__ import annotations

import argparse
import json
import logging
import random
from pathlib import Path
from typing import Any, List, Optional

from isoforge.data.routes import OperatingConditions, ReactionRoute, conditions_from_dict, route_from_dict
from isoforge.errors import InvalidParameterError
from isoforge.evaluation.route_evaluator import NUMERIC_OUTPUTS, RouteEvaluator
from isoforge.uncertainty.budget import create_production_budget
from isoforge.uncertainty.propagation import monte_carlo, specs_from_dict


def _load_json(path: Path):
    return json.loads(path.read_text())


def _write_or_print(data: Any, output: Optional[Path]) -> None:
    text = json.dumps(data, indent=2)
    if output is None:
        print(text)
    else:
        output.write_text(text)
        print(f"Wrote results to {output}")


def _load_routes(path: Path) -> List[ReactionRoute]:
    raw = _load_json(path)
    records = raw if isinstance(raw, list) else [raw]
    return [route_from_dict(record) for record in records]


def _select_route(routes: List[ReactionRoute], route_id: Optional[str]) -> ReactionRoute:
    if route_id is None:
        if len(routes) != 1:
            raise InvalidParameterError("Route file holds several routes; pick one with --route-id")
        return routes[0]
    for route in routes:
        if route.route_id == route_id:
            return route
    raise InvalidParameterError(f"Route '{route_id}' not found in route file")


def _load_conditions(path: Optional[Path]) -> OperatingConditions:
    if path is None:
        return OperatingConditions()
    return conditions_from_dict(_load_json(path))


def cmd_evaluate(args: argparse.Namespace) -> None:
    routes = _load_routes(args.route)
    conditions = _load_conditions(args.conditions)
    evaluator = RouteEvaluator()

    results = evaluator.evaluate_many(routes, conditions)
    if args.summary:
        for result in results:
            print(result.summary())
    payload = [result.to_dict() for result in results]
    _write_or_print(payload[0] if len(payload) == 1 else payload, args.output)


def cmd_monte_carlo(args: argparse.Namespace) -> None:
    route = _select_route(_load_routes(args.route), args.route_id)
    conditions = _load_conditions(args.conditions)
    specs = specs_from_dict(_load_json(args.uncertainties))
    evaluator = RouteEvaluator()

    nominal = evaluator.nominal_parameters(route, conditions)
    for name in specs:
        value = getattr(conditions, name, None)
        if name not in nominal and isinstance(value, (int, float)):
            nominal[name] = float(value)
    kernel = evaluator.kernel(route, conditions, output=args.quantity)
    rng = random.Random(args.seed).random if args.seed is not None else None

    result = monte_carlo(kernel, nominal, specs, args.samples, rng=rng)
    payload = {
        "route_id": route.route_id,
        "quantity": args.quantity,
        "nominal": kernel(nominal),
        **result.to_dict(include_samples=args.include_samples),
    }
    _write_or_print(payload, args.output)


def cmd_budget(args: argparse.Namespace) -> None:
    route = _select_route(_load_routes(args.route), args.route_id)
    result = RouteEvaluator().evaluate(route, _load_conditions(args.conditions))
    budget = create_production_budget(
        result.activity_bq,
        flux_rel=args.flux_rel,
        cross_section_rel=args.cross_section_rel,
        chemistry_yield_rel=args.chemistry_yield_rel,
    )
    budget.name = route.route_id
    print(budget.summary_table())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Planning-grade radioisotope production calculator")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    subparsers = parser.add_subparsers(dest="command", required=True)

    evaluate = subparsers.add_parser("evaluate", help="Evaluate production routes")
    evaluate.add_argument("--route", type=Path, required=True, help="Route record or list of records (JSON)")
    evaluate.add_argument("--conditions", type=Path, help="Operating conditions (JSON)")
    evaluate.add_argument("--output", type=Path)
    evaluate.add_argument("--summary", action="store_true", help="Also print a text summary")
    evaluate.set_defaults(func=cmd_evaluate)

    mc = subparsers.add_parser("monte-carlo", help="Propagate input uncertainties by Monte Carlo")
    mc.add_argument("--route", type=Path, required=True)
    mc.add_argument("--route-id")
    mc.add_argument("--conditions", type=Path)
    mc.add_argument("--uncertainties", type=Path, required=True, help="Per-parameter distributions (JSON)")
    mc.add_argument("--samples", type=int, default=1000)
    mc.add_argument("--seed", type=int)
    mc.add_argument("--quantity", choices=NUMERIC_OUTPUTS, default="activity_bq")
    mc.add_argument("--include-samples", action="store_true")
    mc.add_argument("--output", type=Path)
    mc.set_defaults(func=cmd_monte_carlo)

    budget = subparsers.add_parser("budget", help="Print a planning uncertainty budget for a route")
    budget.add_argument("--route", type=Path, required=True)
    budget.add_argument("--route-id")
    budget.add_argument("--conditions", type=Path)
    budget.add_argument("--flux-rel", type=float, default=0.10)
    budget.add_argument("--cross-section-rel", type=float, default=0.20)
    budget.add_argument("--chemistry-yield-rel", type=float, default=0.05)
    budget.set_defaults(func=cmd_budget)

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    args.func(args)


if __name__ == "__main__":
    main()
