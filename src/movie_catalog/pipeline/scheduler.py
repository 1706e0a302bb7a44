"""
Scheduler for recurring ingestion cycles.

Runs one cycle immediately, then one cycle per interval. The wait for the
next cycle starts when the previous cycle returns, so two cycles never run at
the same time: a cycle that overruns the interval simply delays the next one.
"""

import logging
import threading
from typing import Callable, Optional


logger = logging.getLogger("pipeline")


class IngestionScheduler:
    """
    Single-flight loop around a cycle function.

    Args:
        run_cycle: Callable running one ingestion cycle
        interval_seconds: Delay between the end of a cycle and the start of the next
    """

    def __init__(self, run_cycle: Callable[[], object], interval_seconds: float):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.run_cycle = run_cycle
        self.interval_seconds = interval_seconds
        self.cycles_run = 0
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def run_once(self) -> object:
        """Run one cycle; any exception is logged and swallowed so the loop survives."""
        self.cycles_run += 1
        try:
            return self.run_cycle()
        except Exception as e:
            logger.error(
                f"Ingestion cycle {self.cycles_run} failed: {type(e).__name__}: {e}",
                exc_info=True,
            )
            return None

    def run_forever(self) -> None:
        """Run cycles until stop() is called. Blocks the calling thread."""
        logger.info(
            f"Scheduler started: one ingestion cycle every {self.interval_seconds:g} seconds"
        )
        while not self._stop_event.is_set():
            self.run_once()
            if self._stop_event.wait(self.interval_seconds):
                break
        logger.info("Scheduler stopped")

    def start(self) -> threading.Thread:
        """Start the loop in a background daemon thread."""
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("Scheduler is already running")
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self.run_forever, name="ingestion-scheduler", daemon=True
        )
        self._thread.start()
        return self._thread

    def stop(self, timeout: Optional[float] = None) -> None:
        """Ask the loop to stop and wait for the running cycle to finish."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
