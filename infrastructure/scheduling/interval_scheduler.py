"""Fixed-interval job scheduler.

Fires a job every ``interval_seconds``, ticker style: the first run happens
one full interval after ``start()``. A failing job is logged and the loop
keeps going.

Example:
    scheduler = IntervalScheduler(3600, run_backup, name="backup")
    await scheduler.start()

    # ... worker runs ...

    await scheduler.stop()
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Any

import structlog

logger = structlog.get_logger()


class IntervalScheduler:
    def __init__(
        self,
        interval_seconds: float,
        job: Callable[[], Any] | Callable[[], Awaitable[Any]],
        *,
        name: str = "job",
    ) -> None:
        self._interval = interval_seconds
        self._job = job
        self._name = name
        self._running = False
        self._task: asyncio.Task | None = None
        self.runs = 0

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        if self._running:
            return

        self._running = True
        self._task = asyncio.create_task(self._run_loop())
        logger.info("scheduler_started", job=self._name, interval_seconds=self._interval)

    async def stop(self) -> None:
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("scheduler_stopped", job=self._name, runs=self.runs)

    async def wait(self) -> None:
        """Block until the scheduler is stopped."""
        if self._task:
            try:
                await self._task
            except asyncio.CancelledError:
                pass

    async def _run_loop(self) -> None:
        while self._running:
            await asyncio.sleep(self._interval)
            await self._tick()

    async def _tick(self) -> None:
        self.runs += 1
        logger.info("scheduler_tick", job=self._name, run=self.runs)
        try:
            if inspect.iscoroutinefunction(self._job):
                await self._job()
            else:
                # Sync jobs do blocking I/O; keep them off the event loop
                await asyncio.to_thread(self._job)
        except Exception:
            logger.exception("scheduler_job_failed", job=self._name, run=self.runs)
