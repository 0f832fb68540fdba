from __future__ import annotations

import math

from things_left_behind.core.affinity import apply_storage_affinity, apply_vehicle_affinity


def test_missing_affinity_list_is_neutral() -> None:
    assert apply_vehicle_affinity(0.4, None, "truck") == 0.4
    assert apply_storage_affinity(0.4, [], "storTrunk") == 0.4


def test_match_and_mismatch_multipliers() -> None:
    assert math.isclose(apply_vehicle_affinity(0.4, ["truck"], "truck"), 0.4 * 1.85)
    assert math.isclose(apply_vehicle_affinity(0.4, ["truck"], "sedan"), 0.4 * 0.3)
    assert math.isclose(apply_storage_affinity(1.0, ["hangMirror"], "storTrunk"), 0.3)


def test_axes_compose_multiplicatively() -> None:
    weight = apply_vehicle_affinity(0.5, ["van"], "van")
    weight = apply_storage_affinity(weight, ["storCargo"], "seatFront")
    assert math.isclose(weight, 0.5 * 1.85 * 0.3)


def test_custom_multipliers() -> None:
    assert apply_vehicle_affinity(1.0, ["van"], "van", match=3.0) == 3.0
    assert apply_storage_affinity(1.0, ["storCargo"], "storTrunk", mismatch=0.0) == 0.0
