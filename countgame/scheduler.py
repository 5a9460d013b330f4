"""Periodic drivers for a live session.

A scheduler hands out ``PeriodicTask`` objects through ``every(period,
callback, name)``. Cancelling a task is idempotent; a cancelled task never
calls its callback again.
"""

import asyncio
import logging

logger = logging.getLogger(__name__)


class PeriodicTask:
    def __init__(self, name, period, callback):
        self.name = name
        self.period = period
        self.callback = callback
        self._cancelled = False

    @property
    def active(self):
        return not self._cancelled

    def cancel(self):
        if self._cancelled:
            return
        self._cancelled = True
        logger.debug("driver %s cancelled", self.name)


class AsyncioTask(PeriodicTask):
    def __init__(self, name, period, callback, loop=None):
        super().__init__(name, period, callback)
        loop = loop or asyncio.get_running_loop()
        self._task = loop.create_task(self._run(), name=name)

    async def _run(self):
        while not self._cancelled:
            await asyncio.sleep(self.period)
            if self._cancelled:
                break
            try:
                self.callback()
            except Exception:
                logger.exception("driver %s failed, stopping", self.name)
                self._cancelled = True

    @property
    def done(self):
        return self._task.done()

    def cancel(self):
        super().cancel()
        if not self._task.done():
            self._task.cancel()


class AsyncioScheduler:
    """Runs each driver as a task on an asyncio event loop."""

    def __init__(self, loop=None):
        self.loop = loop

    def every(self, period, callback, name="driver"):
        logger.debug("driver %s started (period=%.3fs)", name, period)
        return AsyncioTask(name, period, callback, loop=self.loop)


class ManualScheduler:
    """Scheduler whose tasks only run when the caller fires them.

    Used by the Gymnasium environment (which steps frame by frame) and by
    tests.
    """

    def __init__(self):
        self.tasks = {}

    def every(self, period, callback, name="driver"):
        task = PeriodicTask(name, period, callback)
        self.tasks[name] = task
        return task

    def fire(self, task):
        if task is None or not task.active:
            return False
        task.callback()
        return True

    def advance(self, name):
        """Fire the most recent task registered under ``name``."""
        return self.fire(self.tasks.get(name))
