# task_scheduler/windows.py
from datetime import date, datetime, timedelta
from typing import Tuple

import numpy as np
import pandas as pd

from .models import WorkWindow

# More than a year of holidays back to back is treated as a broken config.
MAX_LOOKAHEAD_DAYS = 400


def is_working_day(day: date, window: WorkWindow) -> bool:
    holidays = np.array([np.datetime64(h, "D") for h in window.holidays], dtype="datetime64[D]")
    return bool(np.is_busday(np.datetime64(day, "D"),
                             weekmask=window.weekmask,
                             holidays=holidays))


def window_on(day: date, window: WorkWindow, tz=None) -> Tuple[pd.Timestamp, pd.Timestamp]:
    """Start and end instants of the working window on `day`, in zone `tz`."""
    start = pd.Timestamp(datetime.combine(day, window.start))
    end = pd.Timestamp(datetime.combine(day, window.end))
    if tz is not None:
        # DST gaps push the boundary forward; repeated hours resolve to standard time
        start = start.tz_localize(tz, ambiguous=False, nonexistent="shift_forward")
        end = end.tz_localize(tz, ambiguous=False, nonexistent="shift_forward")
    return start, end


def next_window(t: pd.Timestamp, window: WorkWindow) -> Tuple[pd.Timestamp, pd.Timestamp]:
    """
    First working window that ends after `t`.

    A `t` that lands exactly on a window end belongs to the following window.
    """
    day = t.date()
    for offset in range(MAX_LOOKAHEAD_DAYS):
        candidate = day + timedelta(days=offset)
        if not is_working_day(candidate, window):
            continue
        start, end = window_on(candidate, window, t.tz)
        if t < end:
            return start, end
    raise ValueError(f"no working window within {MAX_LOOKAHEAD_DAYS} days of {t}")


def advance(t: pd.Timestamp, window: WorkWindow) -> pd.Timestamp:
    """Move `t` forward to the next in-window moment; in-window values are unchanged."""
    start, _ = next_window(t, window)
    return max(t, start)
