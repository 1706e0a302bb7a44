import threading
import time

import pytest

from movie_catalog.pipeline import IngestionScheduler


def wait_for(predicate, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return False


def test_first_cycle_runs_immediately():
    ran = threading.Event()
    scheduler = IngestionScheduler(ran.set, interval_seconds=3600)

    scheduler.start()
    try:
        assert ran.wait(2)
    finally:
        scheduler.stop(timeout=2)
    assert not scheduler.running
    assert scheduler.cycles_run == 1


def test_cycles_repeat_and_never_overlap():
    active = []
    overlaps = []
    calls = []

    def slow_cycle():
        if active:
            overlaps.append(True)
        active.append(True)
        calls.append(time.monotonic())
        time.sleep(0.05)  # longer than the interval
        active.pop()

    scheduler = IngestionScheduler(slow_cycle, interval_seconds=0.01)
    scheduler.start()
    try:
        assert wait_for(lambda: len(calls) >= 3)
    finally:
        scheduler.stop(timeout=2)

    assert overlaps == []
    # Next start is measured from the previous end
    assert all(b - a >= 0.05 for a, b in zip(calls, calls[1:]))


def test_failing_cycle_does_not_stop_scheduler():
    calls = []

    def broken_cycle():
        calls.append(1)
        raise RuntimeError("database is locked")

    scheduler = IngestionScheduler(broken_cycle, interval_seconds=0.01)
    scheduler.start()
    try:
        assert wait_for(lambda: len(calls) >= 2)
    finally:
        scheduler.stop(timeout=2)


def test_run_once_returns_cycle_result():
    scheduler = IngestionScheduler(lambda: {"added": 1}, interval_seconds=60)
    assert scheduler.run_once() == {"added": 1}


def test_start_twice_is_rejected():
    scheduler = IngestionScheduler(lambda: None, interval_seconds=3600)
    scheduler.start()
    try:
        with pytest.raises(RuntimeError):
            scheduler.start()
    finally:
        scheduler.stop(timeout=2)


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        IngestionScheduler(lambda: None, interval_seconds=0)
