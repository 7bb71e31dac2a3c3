"""Route evaluation on top of the physics kernel."""

from isoforge.evaluation.route_evaluator import (
    APPLICATION_THRESHOLDS_GBQ,
    NUMERIC_OUTPUTS,
    EvaluationResult,
    Feasibility,
    RouteEvaluator,
)

__all__ = ["APPLICATION_THRESHOLDS_GBQ", "NUMERIC_OUTPUTS", "EvaluationResult", "Feasibility", "RouteEvaluator"]
