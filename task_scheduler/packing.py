# task_scheduler/packing.py
import logging

import pandas as pd

from .errors import InvalidInput
from .models import OverflowPolicy, ScheduledSlot, ScheduleResult, TimeSlot, Violation, WorkWindow
from .windows import next_window

logger = logging.getLogger(__name__)

# Windows tried for one no-split task before giving up (short DST days, holidays).
MAX_WINDOW_HOPS = 31


def _place(cursor: pd.Timestamp, duration: pd.Timedelta, window: WorkWindow, index: int):
    win_start, win_end = next_window(cursor, window)
    start = max(cursor, win_start)
    if window.overflow == OverflowPolicy.SPILL:
        return start, start + duration

    for _ in range(MAX_WINDOW_HOPS):
        if start + duration <= win_end:
            return start, start + duration
        # whole task moves on; the boundary instant belongs to the next window
        win_start, win_end = next_window(win_end, window)
        start = win_start
    raise InvalidInput(index, "estimated_time_to_completion",
                       f"no working window in the next {MAX_WINDOW_HOPS} can hold "
                       f"{int(duration.total_seconds() // 60)} minutes")


def pack_tasks(ordered_df: pd.DataFrame, now: pd.Timestamp, window: WorkWindow) -> ScheduleResult:
    """
    Lay tasks end to end from `now`, in the frame's row order.

    Each task gets the earliest in-window start after the previous task ends.
    Tasks that finish after their due date are still placed and reported.
    """
    result = ScheduleResult()
    cursor = now

    for _, row in ordered_df.iterrows():
        index = int(row["index"])
        task_id = row["id"]
        duration = pd.Timedelta(minutes=int(row["minutes"]))

        start, end = _place(cursor, duration, window, index)
        result.slots.append(ScheduledSlot(task_index=index, slot=TimeSlot(start, end), task_id=task_id))
        logger.debug("task %d placed at %s - %s", index, start, end)
        cursor = end

        due = row["due"]
        if end > due:
            result.violations.append(Violation(task_index=index, due=due, finish=end, task_id=task_id))

    return result
