from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Mapping, Protocol, Sequence, TypeVar

K = TypeVar("K")
T = TypeVar("T")


class EmptyDistribution(ValueError):
    """Raised when a weighted choice has no positive-weight candidate."""


class RandomSource(Protocol):
    def next_float(self) -> float: ...

    def next_int(self, min_inclusive: int, max_exclusive: int) -> int: ...


def seed_to_uint32(seed: int | str) -> int:
    text = str(seed).encode("utf-8")
    digest = hashlib.sha256(text).hexdigest()
    value = int(digest[:8], 16)
    return value if value != 0 else 0x9E3779B9


@dataclass(slots=True)
class DeterministicRNG:
    seed: int | str
    state: int
    calls: int = 0

    @classmethod
    def from_seed(cls, seed: int | str) -> "DeterministicRNG":
        return cls(seed=seed, state=seed_to_uint32(seed), calls=0)

    def _next_uint32(self) -> int:
        value = self.state & 0xFFFFFFFF
        value ^= (value << 13) & 0xFFFFFFFF
        value ^= (value >> 17) & 0xFFFFFFFF
        value ^= (value << 5) & 0xFFFFFFFF
        value &= 0xFFFFFFFF
        self.state = value if value != 0 else 0x6D2B79F5
        self.calls += 1
        return self.state

    def next_float(self) -> float:
        return self._next_uint32() / 2**32

    def next_int(self, min_inclusive: int, max_exclusive: int) -> int:
        if max_exclusive <= min_inclusive:
            raise ValueError(
                f"next_int requires max_exclusive ({max_exclusive}) > min_inclusive ({min_inclusive})."
            )
        span = max_exclusive - min_inclusive
        return min_inclusive + int(self.next_float() * span)


def choose(rng: RandomSource, weights: Mapping[K, float]) -> K:
    """Pick a key with probability proportional to its weight.

    Keys are walked in mapping order and non-positive weights are skipped, so a
    fixed random stream always yields the same key for the same mapping.
    """
    total_weight = sum(weight for weight in weights.values() if weight > 0)
    if total_weight <= 0:
        raise EmptyDistribution("choose called with no positive weights.")

    cursor = rng.next_float() * total_weight
    cumulative = 0.0
    for key, weight in weights.items():
        if weight <= 0:
            continue
        cumulative += weight
        if cursor <= cumulative:
            return key

    # Float drift: fall back to the first positive entry.
    for key, weight in weights.items():
        if weight > 0:
            return key
    raise EmptyDistribution("choose failed to resolve a key.")


def choose_safe(rng: RandomSource, weights: Mapping[K, float] | None) -> K | None:
    if not weights:
        return None
    filtered = {key: weight for key, weight in weights.items() if weight > 0}
    if not filtered:
        return None
    return choose(rng, filtered)


def roll(rng: RandomSource, probability: float) -> bool:
    clamped = max(0.0, min(1.0, float(probability)))
    draw = rng.next_float()
    if clamped <= 0.0:
        return False
    return draw <= clamped


def pick_uniform(rng: RandomSource, values: Sequence[T]) -> T | None:
    if not values:
        return None
    return values[rng.next_int(0, len(values))]
