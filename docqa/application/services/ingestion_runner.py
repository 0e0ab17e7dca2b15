"""
In-process runner for detached ingestion jobs.

Runs pipeline coroutines as asyncio tasks after the upload response has
been sent. Holds strong references until completion, logs failures that
escape the pipeline, and supports draining or cancelling in-flight work
on shutdown.

Dependencies: asyncio
System role: Background task abstraction for document ingestion
"""

import asyncio
import logging
from typing import Any, Coroutine

logger = logging.getLogger(__name__)


class IngestionTaskRunner:
    """Fire-and-forget task runner with explicit lifecycle."""

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    @property
    def pending(self) -> int:
        """Number of tasks still running."""
        return len(self._tasks)

    def submit(self, coro: Coroutine[Any, Any, Any], name: str | None = None) -> asyncio.Task:
        """
        Schedule a coroutine on the running loop.

        Args:
            coro: Coroutine to run
            name: Task name used in logs

        Returns:
            asyncio.Task: Scheduled task

        Raises:
            RuntimeError: Runner already shut down
        """
        if self._closed:
            coro.close()
            raise RuntimeError("Ingestion runner is shut down")

        task = asyncio.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._on_done)
        logger.info(f"{__name__}:submit - Task scheduled", extra={"task_name": task.get_name()})
        return task

    def _on_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.warning(f"{__name__}:_on_done - Task cancelled", extra={"task_name": task.get_name()})
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                f"{__name__}:_on_done - Task failed: {type(exc).__name__}: {exc}",
                extra={"task_name": task.get_name()},
                exc_info=exc,
            )

    async def drain(self, timeout: float | None = None) -> None:
        """
        Wait for all in-flight tasks to finish.

        Args:
            timeout: Seconds to wait (None waits forever)
        """
        if not self._tasks:
            return
        await asyncio.wait(set(self._tasks), timeout=timeout)

    async def shutdown(self, timeout: float | None = 30.0) -> None:
        """
        Stop accepting work, wait for in-flight tasks, then cancel stragglers.

        Args:
            timeout: Seconds to wait before cancelling
        """
        self._closed = True
        await self.drain(timeout)

        remaining = list(self._tasks)
        for task in remaining:
            task.cancel()
        if remaining:
            logger.warning(
                f"{__name__}:shutdown - Cancelled {len(remaining)} unfinished tasks",
            )
            await asyncio.gather(*remaining, return_exceptions=True)
