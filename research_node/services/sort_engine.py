"""Sorting algorithms exposed for ad-hoc benchmarking.

All three algorithms compare elements with ``<`` only and are stable, so for the
same input they return identical lists.
"""
from __future__ import annotations

import logging
import math
import time
from typing import Any, Callable, Sequence

from research_node.core.exceptions import InvalidInputError
from research_node.core.metrics import sample_resources

logger = logging.getLogger(__name__)

SortFn = Callable[[Sequence[Any]], list]

_PIVOT = object()


def bubble_sort(values: Sequence[Any]) -> list:
    items = list(values)
    length = len(items)
    for i in range(length):
        for j in range(length - i - 1):
            if items[j + 1] < items[j]:
                items[j], items[j + 1] = items[j + 1], items[j]
    return items


def quick_sort(values: Sequence[Any]) -> list:
    """First-element pivot quick sort building new lists at each partition.

    Elements strictly less than the pivot go left, everything else goes right in
    its original order. Partitions are processed from an explicit stack, so the
    O(n) depth reached on already sorted input does not hit the recursion limit.
    """

    result: list = []
    pending: list = [list(values)]
    while pending:
        entry = pending.pop()
        if isinstance(entry, tuple) and entry[0] is _PIVOT:
            result.append(entry[1])
            continue
        if len(entry) <= 1:
            result.extend(entry)
            continue
        pivot = entry[0]
        left = []
        right = []
        for item in entry[1:]:
            if item < pivot:
                left.append(item)
            else:
                right.append(item)
        pending.append(right)
        pending.append((_PIVOT, pivot))
        pending.append(left)
    return result


def binary_insertion_sort(values: Sequence[Any]) -> list:
    """Insertion sort locating each slot by binary search (upper bound)."""

    items = list(values)
    for i in range(1, len(items)):
        key = items[i]
        low, high = 0, i - 1
        while low <= high:
            mid = (low + high) // 2
            if key < items[mid]:
                high = mid - 1
            else:
                low = mid + 1
        for j in range(i - 1, low - 1, -1):
            items[j + 1] = items[j]
        items[low] = key
    return items


ALGORITHMS: dict[str, SortFn] = {
    "bubbleSort": bubble_sort,
    "quickSort": quick_sort,
    "binarySort": binary_insertion_sort,
}


def _measure(sort: SortFn, values: list) -> dict[str, Any]:
    before = sample_resources()
    started = time.perf_counter()
    sorted_list = sort(list(values))
    elapsed = (time.perf_counter() - started) * 1000
    after = sample_resources()
    memory_delta = (after.heap_used - before.heap_used) / 1024 / 1024
    return {
        "sortedList": sorted_list,
        "elapsedTime": f"{elapsed:.2f} ms",
        "memoryUsage": f"{memory_delta} MB",
        "cpuUsage": f"{(after.load_average - before.load_average) * 100:.2f}%",
    }


def run_benchmark(values: Any) -> dict[str, dict[str, Any]]:
    """Run every algorithm sequentially on its own copy of ``values``.

    Memory and CPU figures are process heap and host load-average deltas; they
    are best-effort diagnostics and the memory delta may be negative.
    """

    if not isinstance(values, list):
        raise InvalidInputError("Invalid input: List must be an array")
    if any(isinstance(value, float) and not math.isfinite(value) for value in values):
        raise InvalidInputError("Invalid input: List elements must be finite numbers")

    results: dict[str, dict[str, Any]] = {}
    for name, sort in ALGORITHMS.items():
        try:
            results[name] = _measure(sort, values)
        except TypeError as exc:
            raise InvalidInputError(
                "Invalid input: List elements must be mutually comparable"
            ) from exc
        logger.debug("%s sorted %d items in %s", name, len(values), results[name]["elapsedTime"])
    return results
