from __future__ import annotations

from typing import Sequence

MATCH_MULTIPLIER = 1.85
MISMATCH_MULTIPLIER = 0.3
NEUTRAL_MULTIPLIER = 1.0


def _apply(
    base_weight: float,
    tags: Sequence[str] | None,
    target: str,
    match: float,
    mismatch: float,
) -> float:
    if not tags:
        return base_weight * NEUTRAL_MULTIPLIER
    if target in tags:
        return base_weight * match
    return base_weight * mismatch


def apply_vehicle_affinity(
    base_weight: float,
    item_aff_vehicles: Sequence[str] | None,
    vehicle_type: str,
    match: float = MATCH_MULTIPLIER,
    mismatch: float = MISMATCH_MULTIPLIER,
) -> float:
    return _apply(base_weight, item_aff_vehicles, vehicle_type, match, mismatch)


def apply_storage_affinity(
    base_weight: float,
    item_aff_storage: Sequence[str] | None,
    storage_key: str,
    match: float = MATCH_MULTIPLIER,
    mismatch: float = MISMATCH_MULTIPLIER,
) -> float:
    return _apply(base_weight, item_aff_storage, storage_key, match, mismatch)
