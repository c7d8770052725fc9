"""Thread-pool helpers for collaborator calls.

Both helpers return results in submission order.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")


def batched(items: Sequence[T], size: int) -> list[list[T]]:
    """Split items into consecutive batches of at most `size`."""
    size = max(1, size)
    return [list(items[i : i + size]) for i in range(0, len(items), size)]


def run_ordered(fn: Callable[[T], R], items: Sequence[T], max_workers: int = 4) -> list[R]:
    """Map fn over items concurrently; result i belongs to item i.

    The first exception (in item order) is re-raised.
    """
    if not items:
        return []
    if len(items) == 1 or max_workers <= 1:
        return [fn(it) for it in items]
    with ThreadPoolExecutor(max_workers=min(max_workers, len(items))) as executor:
        return list(executor.map(fn, items))


def run_all_or_fail(fn: Callable[[T], R], items: Sequence[T], max_workers: int = 4) -> list[R]:
    """Run every item concurrently; any failure aborts the whole batch.

    Waits until all tasks finished or one raised. On failure, tasks not yet
    started are cancelled and the first failure is re-raised, so partial
    results never leave this function.
    """
    if not items:
        return []
    executor = ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(items))))
    try:
        futures = [executor.submit(fn, it) for it in items]
        done, _pending = wait(futures, return_when=FIRST_EXCEPTION)
        for fut in futures:
            if fut in done:
                err = fut.exception()
                if err is not None:
                    raise err
        return [fut.result() for fut in futures]
    finally:
        executor.shutdown(wait=True, cancel_futures=True)
