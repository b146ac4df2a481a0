from __future__ import annotations

from typing import Any, Callable, List, MutableSequence

from .ranked import by_metric_desc

Compare = Callable[[Any, Any], int]


def quicksort(items: MutableSequence[Any], compare: Compare = by_metric_desc) -> None:
    """
    Sort `items` in place, ascending under `compare`.

    With the default `by_metric_desc` that means largest metric first.
    Pivot is always the last element of a range, so already-sorted input is
    the O(N^2) worst case. Pending ranges live on an explicit stack with the
    smaller one handled first, which keeps the stack at O(log N) entries.
    """
    n = len(items)
    if n < 2:
        return
    stack: List[tuple] = [(0, n - 1)]
    while stack:
        low, high = stack.pop()
        if high - low < 1:
            continue
        p = _partition(items, low, high, compare)
        left = (low, p - 1)
        right = (p + 1, high)
        if (p - low) > (high - p):
            stack.append(left)
            stack.append(right)
        else:
            stack.append(right)
            stack.append(left)


def _partition(items: MutableSequence[Any], low: int, high: int, compare: Compare) -> int:
    pivot = items[high]
    i = low - 1
    j = high
    while True:
        i += 1
        # stops at the pivot slot at the latest
        while compare(items[i], pivot) < 0:
            i += 1
        j -= 1
        while j >= low and compare(items[j], pivot) > 0:
            j -= 1
        if i >= j:
            break
        items[i], items[j] = items[j], items[i]
    items[i], items[high] = items[high], items[i]
    return i
