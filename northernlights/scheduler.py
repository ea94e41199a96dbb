"""Background runner for recurring tasks."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta

logger = logging.getLogger(__name__)


@dataclass
class _Task:
    func: Callable[[], object]
    interval: float
    next_run: float


class Scheduler:
    """Runs recurring tasks on one background thread.

    Each task first runs one interval after it is scheduled, then again one
    interval after each run was due. Usable as a context manager.
    """

    def __init__(self) -> None:
        self._tasks: list[_Task] = []
        self._cond = threading.Condition()
        self._running = False
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._running

    def __enter__(self) -> Scheduler:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def start(self) -> None:
        """Start the background thread; does nothing if already running."""
        with self._cond:
            if self._running:
                return
            self._running = True
            thread = threading.Thread(target=self._run, name="scheduler", daemon=True)
            self._thread = thread
        thread.start()
        logger.info("Scheduler started.")

    def stop(self) -> None:
        """Stop the background thread and wait for it to finish."""
        with self._cond:
            if not self._running:
                return
            self._running = False
            self._cond.notify_all()
            thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join()
        logger.info("Scheduler stopped.")

    def schedule_task(self, task: Callable[[], object], interval: timedelta | float) -> None:
        """Run ``task`` every ``interval`` (a timedelta or seconds)."""
        seconds = interval.total_seconds() if isinstance(interval, timedelta) else float(interval)
        if seconds <= 0:
            raise ValueError(f"interval must be positive, got {interval!r}")
        with self._cond:
            self._tasks.append(_Task(task, seconds, time.monotonic() + seconds))
            self._cond.notify_all()

    def _run(self) -> None:
        with self._cond:
            while self._running:
                if not self._tasks:
                    self._cond.wait_for(lambda: not self._running or bool(self._tasks))
                    continue

                now = time.monotonic()
                for task in list(self._tasks):
                    if now < task.next_run:
                        continue
                    self._cond.release()
                    try:
                        task.func()
                    except Exception:
                        logger.exception("Scheduled task raised an exception")
                    finally:
                        self._cond.acquire()
                    task.next_run = now + task.interval

                if self._running:
                    next_due = min(task.next_run for task in self._tasks)
                    self._cond.wait(max(0.0, next_due - time.monotonic()))