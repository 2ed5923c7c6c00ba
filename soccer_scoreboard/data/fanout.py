"""
Concurrent fan-out with per-item failure containment.
"""
import asyncio
from typing import Awaitable, Callable, Iterable, TypeVar

from loguru import logger

T = TypeVar("T")
R = TypeVar("R")


async def fan_out(
    items: Iterable[T],
    operation: Callable[[T], Awaitable[R]],
    fallback: Callable[[T], R],
    label: str = "item",
) -> list[R]:
    """
    Run `operation` for every item concurrently and wait for all to settle.

    A failing item is logged and replaced by `fallback(item)`; it never
    cancels or fails its siblings. Results keep the input order.

    Args:
        items: Inputs to fan out over
        operation: Async operation applied to each item
        fallback: Produces the sentinel result for a failed item
        label: Name used in log messages

    Returns:
        One result per input item
    """
    items = list(items)
    if not items:
        return []

    results = await asyncio.gather(
        *(operation(item) for item in items),
        return_exceptions=True,
    )

    settled: list[R] = []
    for item, result in zip(items, results):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                # CancelledError / KeyboardInterrupt are not item failures
                raise result
            logger.warning(f"{label} fetch failed for {item!r}: {result}")
            settled.append(fallback(item))
        else:
            settled.append(result)

    return settled
