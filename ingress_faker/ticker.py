"""Fixed-interval ticker on top of APScheduler.

The emit job runs with ``max_instances=1``: a tick that fires while the
previous one is still running is dropped and counted, never queued.
"""

import math
import logging

from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_MAX_INSTANCES
from apscheduler.schedulers import SchedulerNotRunningError
from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.interval import IntervalTrigger

logger = logging.getLogger(__name__)


class Ticker:
    JOB_ID = "emit-record"

    def __init__(self, rate: float, task, scheduler=None):
        if not (math.isfinite(rate) and rate > 0):
            raise ValueError(f"rate must be a finite number greater than zero, got {rate!r}")
        self.interval = 1.0 / rate
        self.dropped = 0
        self.failure = None
        self._scheduler = scheduler if scheduler is not None else BlockingScheduler()
        self._scheduler.add_listener(self._on_job_error, EVENT_JOB_ERROR)
        self._scheduler.add_listener(self._on_tick_dropped, EVENT_JOB_MAX_INSTANCES)
        self.job = self._scheduler.add_job(
            task,
            IntervalTrigger(seconds=self.interval),
            id=self.JOB_ID,
            max_instances=1,
            coalesce=True,
            misfire_grace_time=None,
        )

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def start(self):
        """Start firing. Blocks until stop() when using a BlockingScheduler."""
        logger.info("Ticker started: one tick every %.4fs", self.interval)
        self._scheduler.start()

    def stop(self):
        """Stop firing without waiting for an in-flight tick."""
        if not self._scheduler.running:
            return
        try:
            self._scheduler.shutdown(wait=False)
        except SchedulerNotRunningError:
            # Already shut down by a concurrent stop().
            pass

    def _on_tick_dropped(self, event):
        self.dropped += 1
        logger.debug("Tick dropped, previous tick still running (%d dropped)", self.dropped)

    def _on_job_error(self, event):
        self.failure = event.exception
        logger.error("Tick failed, stopping: %s", event.exception)
        self.stop()
