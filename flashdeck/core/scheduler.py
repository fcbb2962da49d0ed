from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from flashdeck.core.logging import get_logger


logger = get_logger(__name__)

JobCallable = Callable[[], Awaitable[None]]


class PeriodicTask:
    """Cancellable in-process task that runs a job at a fixed interval.

    The interval is measured from the end of the previous wait, so a slow job
    pushes later firings back instead of bunching them up. Once ``stop()`` is
    requested the job never fires again.
    """

    def __init__(
        self, job: JobCallable, *, interval: float, name: str = "periodic"
    ) -> None:
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.interval = float(interval)
        self.name = name
        self.runs = 0
        self._job = job
        self._task: Optional[asyncio.Task[None]] = None
        self._stopping = False

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def _loop(self) -> None:
        try:
            while not self._stopping:
                await asyncio.sleep(self.interval)
                if self._stopping:
                    break
                self.runs += 1
                try:
                    await self._job()
                except Exception:  # noqa: BLE001
                    # Keep the loop alive; one bad run should not end the session
                    logger.exception("[%s] run %d failed", self.name, self.runs)
        except asyncio.CancelledError:
            return

    def start(self) -> None:
        if self.running:
            return
        self._stopping = False
        self._task = asyncio.create_task(self._loop(), name=self.name)
        logger.debug("[%s] started (every %.3fs)", self.name, self.interval)

    async def stop(self) -> None:
        self._stopping = True
        task = self._task
        self._task = None
        if task is None or task.done():
            return
        task.cancel()
        if task is asyncio.current_task():
            return
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.debug("[%s] stopped after %d runs", self.name, self.runs)
