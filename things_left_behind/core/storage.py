from __future__ import annotations


def capacity_points(size: int) -> int:
    # Size tiers double in cost: 1 -> 1, 2 -> 2, 3 -> 4, ...
    if size <= 0:
        return 0
    return 1 << (size - 1)


def can_fit(remaining_points: int, size: int) -> bool:
    return remaining_points >= capacity_points(size)
