"""
Player inventory: non-negative counts per resource kind.
"""
from __future__ import annotations

from typing import Mapping, Union

from castaway.world import ResourceKind

KindLike = Union[ResourceKind, str]


def _kind(k: KindLike) -> ResourceKind:
    return k if isinstance(k, ResourceKind) else ResourceKind(str(k))


def normalize_cost(cost: Mapping[KindLike, int]) -> dict[ResourceKind, int]:
    """Cost tables come from config with string keys; convert once."""
    return {_kind(k): int(v) for k, v in cost.items()}


class Inventory:
    """Counts never go negative; spending a cost table is all-or-nothing."""

    def __init__(self, initial: Mapping[KindLike, int] | None = None):
        self._counts: dict[ResourceKind, int] = {k: 0 for k in ResourceKind}
        for k, v in (initial or {}).items():
            self._counts[_kind(k)] = max(0, int(v))

    def __getitem__(self, kind: KindLike) -> int:
        return self._counts[_kind(kind)]

    def count(self, kind: KindLike) -> int:
        return self._counts[_kind(kind)]

    def add(self, kind: KindLike, amount: int = 1) -> None:
        if amount < 0:
            raise ValueError("use spend() to remove items")
        self._counts[_kind(kind)] += int(amount)

    def set_count(self, kind: KindLike, amount: int) -> None:
        self._counts[_kind(kind)] = max(0, int(amount))

    def can_afford(self, cost: Mapping[KindLike, int]) -> bool:
        return all(self._counts[_kind(k)] >= int(v) for k, v in cost.items())

    def spend(self, cost: Mapping[KindLike, int]) -> bool:
        """Deduct every entry of `cost`, or nothing at all. Returns True if paid."""
        if not self.can_afford(cost):
            return False
        for k, v in cost.items():
            self._counts[_kind(k)] -= int(v)
        return True

    def missing(self, cost: Mapping[KindLike, int]) -> dict[str, int]:
        """Amounts still needed per kind (only kinds that are short)."""
        out = {}
        for k, v in cost.items():
            short = int(v) - self._counts[_kind(k)]
            if short > 0:
                out[_kind(k).value] = short
        return out

    def as_dict(self) -> dict[str, int]:
        return {k.value: v for k, v in self._counts.items()}
