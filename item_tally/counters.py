from __future__ import annotations
from collections import Counter
from collections.abc import Hashable, Iterable, Iterator, Mapping
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from itertools import islice
from typing import Callable, Dict, List, Optional, Tuple

_EXECUTORS: Dict[str, Callable[..., Executor]] = {
    "thread": ThreadPoolExecutor,
    "process": ProcessPoolExecutor,
}

DEFAULT_CHUNK_SIZE = 10_000


class FrequencyTable(Mapping):
    """Read-only item -> count mapping. Only items that occurred are keys."""

    def __init__(self, counts: Optional[Mapping[Hashable, int]] = None):
        self._counts: Dict[Hashable, int] = dict(counts) if counts else {}

    def __getitem__(self, item: Hashable) -> int:
        return self._counts[item]

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    def __repr__(self) -> str:
        return f"FrequencyTable({self._counts!r})"

    def entries(self) -> List[Tuple[Hashable, int]]:
        return list(self._counts.items())

    def total(self) -> int:
        return sum(self._counts.values())

    def most_common(self, n: Optional[int] = None) -> List[Tuple[Hashable, int]]:
        """Descending count; ties broken by repr(item) so output is stable."""
        ordered = sorted(self._counts.items(), key=lambda kv: (-kv[1], repr(kv[0])))
        return ordered if n is None else ordered[:n]


def count_items(items: Iterable[Hashable]) -> FrequencyTable:
    """Single pass over items. Errors raised by the source propagate as-is."""
    counts: Dict[Hashable, int] = {}
    for item in items:
        counts[item] = counts.get(item, 0) + 1
    return FrequencyTable(counts)


def merge_tables(*tables: Mapping[Hashable, int]) -> FrequencyTable:
    total: Counter = Counter()
    for t in tables:
        total.update(t)
    return FrequencyTable(total)


def split_partitions(items: Iterable[Hashable], chunk_size: int) -> Iterator[List[Hashable]]:
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size!r}")
    return _chunks(iter(items), chunk_size)


def _chunks(it: Iterator[Hashable], size: int) -> Iterator[List[Hashable]]:
    while True:
        chunk = list(islice(it, size))
        if not chunk:
            return
        yield chunk


def count_partitions(
    partitions: Iterable[Iterable[Hashable]],
    *,
    workers: Optional[int] = None,
    executor: str = "thread",
) -> FrequencyTable:
    """
    Count each partition on a worker pool, then merge the partial tables.

    Every worker returns its own table; merging happens on the calling
    thread once all of them have finished.
    """
    try:
        pool_cls = _EXECUTORS[executor]
    except KeyError:
        raise ValueError(
            f"Unsupported executor: {executor!r} (expected one of {sorted(_EXECUTORS)})."
        ) from None

    with pool_cls(max_workers=workers) as pool:
        # partitions are materialized here so the source is read on the caller's thread
        futures = [pool.submit(count_items, list(p)) for p in partitions]
        partials = [f.result() for f in futures]

    return merge_tables(*partials)


def count_parallel(
    items: Iterable[Hashable],
    *,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    workers: Optional[int] = None,
    executor: str = "thread",
) -> FrequencyTable:
    return count_partitions(
        split_partitions(items, chunk_size),
        workers=workers,
        executor=executor,
    )
