"""
Ordered, bounded prefetch on a thread pool.

Results are produced by worker threads but delivered strictly in input
order: futures are queued in submission order and the consumer always
waits on the oldest one. At most ``prefetch`` items are in flight, and a
new item is submitted only when the oldest result is handed out, which
caps memory at ``prefetch`` pending results plus the one being consumed.

Closing the generator early (break, close(), garbage collection) cancels
queued work and shuts the pool down without waiting for running tasks.
Workers are not daemon threads: a fetch still running when its pass is
abandoned keeps going in the background, and concurrent.futures joins its
workers at interpreter exit, so a stalled fetch delays shutdown until it
returns. Fetches that can block indefinitely should carry their own timeout.
"""

from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from itertools import islice
from typing import Callable, Deque, Generator, Iterable, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def prefetch_ordered(
    fetch: Callable[[T], R],
    items: Iterable[T],
    prefetch: int,
    num_workers: int,
) -> Generator[R, None, None]:
    """
    Apply ``fetch`` to each item on a thread pool, yielding in input order.

    Args:
        fetch: Function producing one result per item
        items: Inputs, consumed lazily
        prefetch: Maximum number of submitted but undelivered items
        num_workers: Number of worker threads

    Yields:
        ``fetch(item)`` for each item, in order

    Raises:
        Whatever ``fetch`` raised, at the position of the failing item
    """
    items = iter(items)
    pending: Deque[Future] = deque()
    executor = ThreadPoolExecutor(
        max_workers=num_workers, thread_name_prefix="dataviews-prefetch"
    )
    try:
        for item in islice(items, prefetch):
            pending.append(executor.submit(fetch, item))

        while pending:
            result = pending.popleft().result()
            for item in islice(items, 1):
                pending.append(executor.submit(fetch, item))
            yield result
    finally:
        for future in pending:
            future.cancel()
        executor.shutdown(wait=False, cancel_futures=True)
