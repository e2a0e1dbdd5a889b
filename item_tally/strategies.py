"""
Alternative counter representations, kept for the micro-benchmark only.

All of them produce the same counts as ``counters.count_items``; they differ
in how the per-key counter is stored and therefore in allocation cost:

  - boxed:           the int in the value slot is replaced on every update
  - array_cell:      a one-element list per key, mutated in place
  - mutable_wrapper: a small object with an ``increment()`` method
  - grouped:         sort, then group-and-count (declarative aggregation)
"""
from __future__ import annotations

from collections.abc import Hashable, Iterable
from itertools import groupby
from typing import Callable, Dict, List


class MutableInt:
    __slots__ = ("value",)

    def __init__(self, value: int = 0):
        self.value = value

    def increment(self) -> None:
        self.value += 1


def count_boxed(items: Iterable[Hashable]) -> Dict[Hashable, int]:
    counts: Dict[Hashable, int] = {}
    for item in items:
        counts[item] = counts.get(item, 0) + 1
    return counts


def count_array_cell(items: Iterable[Hashable]) -> Dict[Hashable, int]:
    cells: Dict[Hashable, List[int]] = {}
    for item in items:
        cell = cells.get(item)
        if cell is None:
            cells[item] = [1]
        else:
            cell[0] += 1
    return {k: c[0] for k, c in cells.items()}


def count_mutable_wrapper(items: Iterable[Hashable]) -> Dict[Hashable, int]:
    wrappers: Dict[Hashable, MutableInt] = {}
    for item in items:
        w = wrappers.get(item)
        if w is None:
            w = wrappers[item] = MutableInt()
        w.increment()
    return {k: w.value for k, w in wrappers.items()}


def count_grouped(items: Iterable[Hashable]) -> Dict[Hashable, int]:
    # sorting by repr lets mixed item types share one ordering
    ordered = sorted(items, key=repr)
    counts: Dict[Hashable, int] = {}
    for k, g in groupby(ordered):
        # equal items with different reprs (1 and 1.0) land in separate runs
        counts[k] = counts.get(k, 0) + sum(1 for _ in g)
    return counts


STRATEGIES: Dict[str, Callable[[Iterable[Hashable]], Dict[Hashable, int]]] = {
    "boxed": count_boxed,
    "array_cell": count_array_cell,
    "mutable_wrapper": count_mutable_wrapper,
    "grouped": count_grouped,
}
