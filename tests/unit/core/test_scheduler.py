from __future__ import annotations

import threading

from creatorlink.core.scheduler import ThreadingScheduler


def test_threading_scheduler_runs_callback_after_delay():
    done = threading.Event()
    ThreadingScheduler().schedule_after(0.01, done.set)
    assert done.wait(timeout=2) is True


def test_cancelled_callback_never_runs():
    ran = threading.Event()
    handle = ThreadingScheduler().schedule_after(0.2, ran.set)
    handle.cancel()
    assert ran.wait(timeout=0.4) is False
    assert handle.active is False


def test_callback_errors_are_contained(caplog):
    done = threading.Event()

    def _boom():
        done.set()
        raise RuntimeError("boom")

    handle = ThreadingScheduler().schedule_after(0.01, _boom)
    assert done.wait(timeout=2) is True
    handle._timer.join(timeout=2)
    assert any(record.getMessage() == "scheduler.callback.failed" for record in caplog.records)
