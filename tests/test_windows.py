from datetime import date, time, timedelta

import pandas as pd
import pytest

from task_scheduler import WorkWindow
from task_scheduler.windows import advance, is_working_day, next_window, window_on

from .conftest import ts


def test_inside_window_is_unchanged(window):
    t = ts("2025-11-03 10:17")
    assert advance(t, window) == t
    assert next_window(t, window) == (ts("2025-11-03 09:00"), ts("2025-11-03 18:00"))


def test_before_hours_moves_to_same_day_start(window):
    assert advance(ts("2025-11-03 07:00"), window) == ts("2025-11-03 09:00")


def test_after_hours_moves_to_next_day(window):
    assert advance(ts("2025-11-03 19:00"), window) == ts("2025-11-04 09:00")


def test_window_end_belongs_to_next_window(window):
    assert advance(ts("2025-11-03 18:00"), window) == ts("2025-11-04 09:00")


def test_skips_weekend_and_holidays():
    w = WorkWindow(weekdays=(0, 1, 2, 3, 4), holidays=(date(2025, 11, 10),))
    assert not is_working_day(date(2025, 11, 8), w)
    assert not is_working_day(date(2025, 11, 10), w)
    assert is_working_day(date(2025, 11, 11), w)
    # Friday evening -> Tuesday, Monday is a holiday
    assert advance(ts("2025-11-07 18:30"), w) == ts("2025-11-11 09:00")


def test_window_on_localises_in_zone():
    start, end = window_on(date(2025, 11, 2), WorkWindow(), "America/New_York")
    assert start == pd.Timestamp("2025-11-02 14:00", tz="UTC")
    assert end == pd.Timestamp("2025-11-02 23:00", tz="UTC")


def test_spring_forward_boundary_shifts_forward():
    w = WorkWindow(start=time(2), end=time(4), tz="America/New_York")
    start, end = window_on(date(2026, 3, 8), w, "America/New_York")
    # 02:00 does not exist that night
    assert start == pd.Timestamp("2026-03-08 03:00", tz="America/New_York")
    assert end == pd.Timestamp("2026-03-08 04:00", tz="America/New_York")


def test_no_window_within_lookahead_raises():
    first_monday = date(2025, 11, 3)
    w = WorkWindow(weekdays=(0,), holidays=tuple(first_monday + timedelta(weeks=k) for k in range(60)))
    with pytest.raises(ValueError, match="no working window"):
        next_window(ts("2025-11-03 10:00"), w)
