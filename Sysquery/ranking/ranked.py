from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, Optional

from Sysquery.runtime.errors import MetricUnavailableError

METRIC_MAX = 2**64 - 1


@dataclass(frozen=True)
class RankedItem:
    """A payload (file record, process record) ranked by an unsigned 64-bit metric."""

    payload: Any
    metric: int

    def __post_init__(self):
        if isinstance(self.metric, bool) or not isinstance(self.metric, int):
            raise ValueError(f"metric must be an int, got {type(self.metric).__name__}")
        if self.metric < 0 or self.metric > METRIC_MAX:
            raise ValueError(f"metric out of unsigned 64-bit range: {self.metric}")


def by_metric_desc(a: RankedItem, b: RankedItem) -> int:
    """
    Three-way comparison that orders the LARGER metric first.

    This is the inverted numeric order: any ascending algorithm (quicksort,
    heap) driven by it yields largest-metric-first.
    """
    if a.metric > b.metric:
        return -1
    if a.metric < b.metric:
        return 1
    return 0


def rank_records(
    records: Iterable[Any],
    measure: Callable[[Any], Optional[RankedItem]],
    on_skip: Optional[Callable[[Any, Exception], None]] = None,
) -> Iterator[RankedItem]:
    """
    Lazily turn raw source records into RankedItems.

    `measure` builds the complete item for one record. If it raises
    MetricUnavailableError or OSError (entry vanished, unreadable, not a
    regular file, process gone) or returns None, the record is skipped and
    nothing partial is produced.
    """
    for record in records:
        try:
            item = measure(record)
        except (MetricUnavailableError, OSError) as exc:
            if on_skip is not None:
                on_skip(record, exc)
            continue
        if item is None:
            continue
        yield item
