# task_scheduler/validation.py
import numbers
from typing import Any, Dict, Optional, Sequence

import pandas as pd

from .errors import InvalidInput
from .models import OverflowPolicy, Priority, Task, WorkWindow

TASK_COLUMNS = ["index", "id", "description", "due", "priority", "minutes"]


def to_instant(value: Any, tz=None) -> pd.Timestamp:
    """
    Read `value` as an instant in zone `tz`.

    Naive values are taken as wall-clock time in `tz`; aware values are converted.
    With no zone, only naive values are accepted.
    """
    ts = pd.Timestamp(value)
    if pd.isna(ts):
        raise ValueError("is missing")
    if tz is None:
        if ts.tzinfo is not None:
            raise ValueError("is timezone-aware but the schedule has no timezone")
        return ts
    if ts.tzinfo is None:
        return ts.tz_localize(tz, ambiguous=False, nonexistent="shift_forward")
    return ts.tz_convert(tz)


def _check_task(index: int, task: Task, tz, window: Optional[WorkWindow]) -> Dict[str, Any]:
    if not isinstance(task.description, str) or not task.description:
        raise InvalidInput(index, "description", "must be a non-empty string")

    if task.due_date is None:
        raise InvalidInput(index, "due_date", "is missing")
    try:
        due = to_instant(task.due_date, tz)
    except (TypeError, ValueError) as exc:
        raise InvalidInput(index, "due_date", str(exc)) from exc

    if task.priority is None:
        raise InvalidInput(index, "priority", "is missing")
    try:
        priority = Priority.parse(task.priority)
    except ValueError as exc:
        raise InvalidInput(index, "priority", str(exc)) from exc

    minutes = task.estimated_time_to_completion
    if isinstance(minutes, bool) or not isinstance(minutes, numbers.Integral) or minutes <= 0:
        raise InvalidInput(index, "estimated_time_to_completion",
                           f"must be a positive whole number of minutes, got {minutes!r}")
    if (window is not None and window.overflow == OverflowPolicy.NO_SPLIT
            and minutes > window.length_minutes):
        raise InvalidInput(index, "estimated_time_to_completion",
                           f"{minutes} minutes cannot fit in a {window.length_minutes}-minute "
                           "working window without splitting")

    return {
        "index": index,
        "id": task.id,
        "description": task.description,
        "due": due,
        "priority": int(priority),
        "minutes": int(minutes),
    }


def build_tasks_frame(tasks: Sequence[Task], tz=None,
                      window: Optional[WorkWindow] = None) -> pd.DataFrame:
    """
    Check every task in input order and return them as a frame.

    Fails on the first bad task. When `window` is given, the window-fit check
    for the no-split policy runs as well.
    """
    rows = [_check_task(i, task, tz, window) for i, task in enumerate(tasks)]
    return pd.DataFrame(rows, columns=TASK_COLUMNS)
