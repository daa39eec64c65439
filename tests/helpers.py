"""Polling helper for reads that follow a sub-resource write.

Sub-resource settings propagate asynchronously, so a read right after a put
may still see the previous document. Tests poll with backoff instead of
sleeping for a fixed time.
"""

import time
from typing import Callable, Tuple, Type, TypeVar

T = TypeVar("T")


def eventually(
    read: Callable[[], T],
    ready: Callable[[T], bool],
    attempts: int = 8,
    delay: float = 0.0,
    backoff: float = 2.0,
    retry_on: Tuple[Type[BaseException], ...] = (),
) -> T:
    """Call ``read`` until ``ready`` accepts its result.

    Args:
        read: Zero-argument read, e.g. ``lambda: ops.get_bucket_website(name)``
        ready: Predicate on the read result
        attempts: Maximum number of reads
        delay: Initial sleep between reads in seconds
        backoff: Multiplier applied to ``delay`` after every read
        retry_on: Exceptions that count as "not visible yet"

    Returns:
        The first accepted result

    Raises:
        AssertionError: If no read was accepted within ``attempts``
    """
    last = None
    for _ in range(attempts):
        try:
            last = read()
        except retry_on:
            last = None
        else:
            if ready(last):
                return last
        if delay:
            time.sleep(delay)
            delay *= backoff
    raise AssertionError(f"Condition not met after {attempts} reads; last result: {last!r}")
