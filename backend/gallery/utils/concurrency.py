"""Bounded-concurrency helpers for upstream fan-out."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def bounded_gather(
    func: Callable[[T], Awaitable[R]],
    items: Iterable[T],
    limit: int = 10,
) -> list[R]:
    """Apply ``func`` to every item with at most ``limit`` calls in flight.

    Results keep the order of ``items``. Exceptions propagate like
    ``asyncio.gather``; callers that need per-item recovery handle it
    inside ``func``.
    """
    if limit < 1:
        raise ValueError("limit must be >= 1")
    semaphore = asyncio.Semaphore(limit)

    async def _run(item: T) -> R:
        async with semaphore:
            return await func(item)

    return await asyncio.gather(*(_run(item) for item in items))
