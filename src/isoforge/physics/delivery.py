"""Post-bombardment decay and chemistry losses."""

from __future__ import annotations

import math
from dataclasses import dataclass

from isoforge.errors import require_fraction, require_non_negative


@dataclass(frozen=True)
class DeliveredActivity:
    """Activity bookkeeping from EOB to the customer (Bq)."""

    activity_eob: float
    activity_after_decay: float
    chemistry_yield: float
    activity_delivered: float
    elapsed_s: float


def decay_factor(decay_const: float, elapsed_s: float) -> float:
    """Fraction of activity surviving after ``elapsed_s`` seconds."""
    require_non_negative(decay_constant=decay_const, elapsed_s=elapsed_s)
    return math.exp(-decay_const * elapsed_s)


def delivered_activity_with_chemistry_yield(activity_bq: float, chemistry_yield: float) -> float:
    require_non_negative(activity=activity_bq)
    require_fraction(chemistry_yield=chemistry_yield)
    return activity_bq * chemistry_yield


def delivered_activity(
    activity_eob: float,
    decay_const: float,
    chemistry_delay_s: float = 0.0,
    transport_s: float = 0.0,
    chemistry_yield: float = 1.0,
) -> DeliveredActivity:
    """Decay the EOB activity through processing and shipping, then apply the yield."""
    require_non_negative(
        activity_eob=activity_eob,
        chemistry_delay_s=chemistry_delay_s,
        transport_s=transport_s,
    )
    elapsed = chemistry_delay_s + transport_s
    after_decay = activity_eob * decay_factor(decay_const, elapsed)
    delivered = delivered_activity_with_chemistry_yield(after_decay, chemistry_yield)
    return DeliveredActivity(
        activity_eob=activity_eob,
        activity_after_decay=after_decay,
        chemistry_yield=chemistry_yield,
        activity_delivered=delivered,
        elapsed_s=elapsed,
    )


__all__ = [
    "DeliveredActivity",
    "decay_factor",
    "delivered_activity_with_chemistry_yield",
    "delivered_activity",
]
