"""
Top-K extraction by metric.

Two interchangeable strategies implement the same operation:

  BoundedTopK          heap capped at K while consuming the input. Peak
                       memory is O(K); used for directory scans.
  CollectThenTruncate  keep every item, sort everything, keep the first K.
                       O(N) memory and an O(N log N) sort regardless of K;
                       used for the process table, whose size is bounded by
                       the host.

Both return a list sorted largest metric first via `quicksort` and
`by_metric_desc`.
"""
from __future__ import annotations

import functools
import heapq
import time
from typing import Callable, Dict, Iterable, List, Optional, Type

from Sysquery.runtime.errors import TopKInvariantError
from Sysquery.runtime.metrics import record_extraction
from Sysquery.runtime.structured_log import log_event

from .ranked import RankedItem, by_metric_desc
from .sort import Compare, quicksort

COUNT_MAX = 255


def validate_count(k) -> int:
    """K is an 8-bit unsigned count."""
    if isinstance(k, bool) or not isinstance(k, int):
        raise ValueError(f"count must be an integer between 0 and {COUNT_MAX}, got {k!r}")
    if k < 0 or k > COUNT_MAX:
        raise ValueError(f"count must be between 0 and {COUNT_MAX}, got {k}")
    return k


class TopKStrategy:
    name = ""

    def __init__(self, compare: Compare = by_metric_desc):
        self.compare = compare
        self.seen = 0

    def extract(self, items: Iterable[RankedItem], k: int) -> List[RankedItem]:
        k = validate_count(k)
        self.seen = 0
        started = time.perf_counter()
        result = self._extract(items, k)
        elapsed_ms = (time.perf_counter() - started) * 1000.0
        record_extraction(self.name, self.seen, len(result), elapsed_ms)
        log_event(
            "topk_extract",
            strategy=self.name,
            k=k,
            seen=self.seen,
            returned=len(result),
            elapsed_ms=round(elapsed_ms, 3),
        )
        return result

    def _extract(self, items: Iterable[RankedItem], k: int) -> List[RankedItem]:
        raise NotImplementedError


class BoundedTopK(TopKStrategy):
    name = "bounded"

    def __init__(self, compare: Compare = by_metric_desc, on_insert: Optional[Callable[[int], None]] = None):
        super().__init__(compare)
        # Observer for the heap size after each insert/evict step.
        self.on_insert = on_insert

    def _extract(self, items, k):
        # heapq is a min-heap, so reverse the comparison: the heap top is the
        # item that sorts LAST under `compare`, i.e. the smallest metric kept.
        compare = self.compare
        wrap = functools.cmp_to_key(lambda a, b: compare(b, a))
        heap = []
        for item in items:
            self.seen += 1
            heapq.heappush(heap, wrap(item))
            if len(heap) > k:
                heapq.heappop(heap)
            if len(heap) > k:
                raise TopKInvariantError(f"bounded heap holds {len(heap)} items, cap is {k}")
            if self.on_insert is not None:
                self.on_insert(len(heap))

        result = [entry.obj for entry in heap]
        quicksort(result, compare)
        return result


class CollectThenTruncate(TopKStrategy):
    name = "collect"

    def _extract(self, items, k):
        collected = []
        for item in items:
            self.seen += 1
            collected.append(item)
        quicksort(collected, self.compare)
        del collected[k:]
        return collected


STRATEGIES: Dict[str, Type[TopKStrategy]] = {
    BoundedTopK.name: BoundedTopK,
    CollectThenTruncate.name: CollectThenTruncate,
}


def get_strategy(name) -> TopKStrategy:
    key = str(name or "").strip().lower()
    cls = STRATEGIES.get(key)
    if cls is None:
        raise ValueError(f"unknown top-k strategy: {name!r} (expected one of {sorted(STRATEGIES)})")
    return cls()


def extract_top_k(items: Iterable[RankedItem], k: int, strategy="bounded") -> List[RankedItem]:
    if not isinstance(strategy, TopKStrategy):
        strategy = get_strategy(strategy)
    return strategy.extract(items, k)
