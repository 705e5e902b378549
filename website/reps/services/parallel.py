# ABOUTME: Small helpers for running independent upstream calls concurrently.
# ABOUTME: Results keep submission order; the first failure propagates to the caller.

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable, List, TypeVar

T = TypeVar('T')
R = TypeVar('R')

MAX_WORKERS = 8


def gather(*calls: Callable[[], Any]) -> List[Any]:
    """Run zero-argument callables concurrently and return their results in order."""
    if not calls:
        return []
    with ThreadPoolExecutor(max_workers=min(len(calls), MAX_WORKERS)) as executor:
        futures = [executor.submit(call) for call in calls]
        return [future.result() for future in futures]


def map_concurrently(func: Callable[[T], R], items: Iterable[T]) -> List[R]:
    items = list(items)
    if not items:
        return []
    with ThreadPoolExecutor(max_workers=min(len(items), MAX_WORKERS)) as executor:
        return list(executor.map(func, items))
