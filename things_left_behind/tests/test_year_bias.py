from __future__ import annotations

import math

from things_left_behind.core.year_bias import multiplier


def test_before_start_year_is_unavailable() -> None:
    assert multiplier(1999, 2000, 2010) == 0


def test_inside_production_window_is_fully_available() -> None:
    assert multiplier(2005, 2000, 2010) == 1
    assert multiplier(2000, 2000, 2010) == 1
    assert multiplier(2010, 2000, 2010) == 1


def test_after_end_year_decays_exponentially() -> None:
    assert math.isclose(multiplier(2020, 2000, 2010), math.exp(-0.15 * 10))
    assert 0 < multiplier(2200, 2000, 2010) < multiplier(2020, 2000, 2010)


def test_open_bounds_and_custom_rate() -> None:
    assert multiplier(1500, None, 2010) == 1
    assert multiplier(2500, 2000, None) == 1
    assert math.isclose(multiplier(2012, 2000, 2010, decay_rate=0.5), math.exp(-1.0))
