"""Sharing of in-flight blocking work between concurrent async callers.

Resolving a classpath runs Maven, which is slow and writes a fresh temp file
per run. When several tool calls ask for the same descriptor at once they join
a single run instead of starting one each.

Notes:
- The blocking callable runs in a worker thread (``asyncio.to_thread``)
- Callers await the shared task through ``asyncio.shield``; cancelling one
  caller does not cancel the work for the others
- The entry is dropped as soon as the work finishes, so results are never
  reused by later calls
"""

from __future__ import annotations

import asyncio
from typing import Callable, Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class InFlightDeduper(Generic[K, V]):
    """Run at most one blocking job per key at a time."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._inflight: dict[K, asyncio.Task[V]] = {}

    async def run(self, key: K, fn: Callable[[], V]) -> V:
        """Run ``fn`` in a worker thread, or join the run already going for ``key``."""

        async with self._lock:
            task = self._inflight.get(key)
            if task is None or task.done():
                task = asyncio.create_task(asyncio.to_thread(fn))
                self._inflight[key] = task
                task.add_done_callback(lambda t: self._forget(key, t))

        return await asyncio.shield(task)

    def _forget(self, key: K, task: asyncio.Task[V]) -> None:
        # A newer task may already be registered under the same key
        if self._inflight.get(key) is task:
            del self._inflight[key]

    def has_inflight(self, key: K) -> bool:
        task = self._inflight.get(key)
        return task is not None and not task.done()


__all__ = ["InFlightDeduper"]
