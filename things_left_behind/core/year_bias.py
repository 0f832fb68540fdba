from __future__ import annotations

import math

DECAY_RATE = 0.15


def multiplier(
    current_year: int,
    start: int | None,
    end: int | None,
    decay_rate: float = DECAY_RATE,
) -> float:
    """Availability of something produced from ``start`` to ``end`` in ``current_year``.

    Zero before it was invented, one while in production, then an exponential
    tail that never quite reaches zero. A missing bound is treated as open.
    """
    if start is not None and current_year < start:
        return 0.0
    if end is None or current_year <= end:
        return 1.0
    years_past_end = current_year - end
    return math.exp(-decay_rate * years_past_end)
