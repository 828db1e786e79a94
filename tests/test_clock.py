from __future__ import annotations

import time
from datetime import timedelta

from jwt_handler.clock import Clock, FixedClock


def test_injected_time_source():
    clock = Clock(get_current_time=lambda: 1300819379)
    assert clock.now() == 1300819379
    assert clock.expiration_epoch(timedelta(seconds=30)) == 1300819409
    assert clock.not_before_epoch(timedelta(seconds=30)) == 1300819349


def test_skew_is_truncated_to_whole_seconds():
    clock = FixedClock(100)
    assert clock.expiration_epoch(timedelta(seconds=1, milliseconds=900)) == 101
    assert clock.not_before_epoch(timedelta(0)) == 100


def test_default_clock_reads_wall_time():
    before = int(time.time())
    now = Clock().now()
    assert before <= now <= int(time.time())
