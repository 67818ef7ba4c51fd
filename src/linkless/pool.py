"""Bounded async worker pool for request processing."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


class RequestPool(Generic[T]):
    """
    Fixed number of worker tasks consuming a bounded queue.

    ``submit`` never waits, so it is safe to call from a delivery callback;
    the number of workers caps how many requests are processed at once.
    """

    def __init__(
        self,
        handler: Callable[[T], Awaitable[None]],
        workers: int = 4,
        max_pending: int = 100,
    ):
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self.handler = handler
        self.workers = workers
        self._queue: asyncio.Queue[T] = asyncio.Queue(maxsize=max_pending)
        self._tasks: list[asyncio.Task] = []

    @property
    def running(self) -> bool:
        return bool(self._tasks)

    def pending_count(self) -> int:
        return self._queue.qsize()

    def submit(self, item: T) -> bool:
        """Queue an item; returns False if the queue is full."""
        try:
            self._queue.put_nowait(item)
        except asyncio.QueueFull:
            logger.warning("Request queue full (%d pending), rejecting", self._queue.qsize())
            return False
        return True

    async def _worker(self, worker_id: int):
        """Worker coroutine that processes queued items."""
        while True:
            item = await self._queue.get()
            try:
                await self.handler(item)
            except Exception:
                logger.exception("Worker %d: unhandled error while processing request", worker_id)
            finally:
                self._queue.task_done()

    async def start(self):
        """Start the worker tasks."""
        if self.running:
            return
        self._tasks = [
            asyncio.create_task(self._worker(i), name=f"linkless-worker-{i}")
            for i in range(self.workers)
        ]

    async def join(self):
        """Wait until every queued item has been processed."""
        await self._queue.join()

    async def stop(self):
        """Drain the queue, then stop the workers."""
        if not self.running:
            return
        await self._queue.join()
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks = []
