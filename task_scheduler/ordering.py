# task_scheduler/ordering.py
from typing import List, Sequence

import pandas as pd

from .models import Task
from .validation import build_tasks_frame


def order_frame(tasks_df: pd.DataFrame) -> List[int]:
    """
    Scheduling order over a validated task frame.

    Earliest due date first, then higher priority, then shorter duration,
    then input position.
    """
    if tasks_df.empty:
        return []
    keyed = tasks_df.assign(neg_priority=-tasks_df["priority"])
    ordered = keyed.sort_values(
        ["due", "neg_priority", "minutes", "index"],
        ascending=True,
        kind="mergesort",
    )
    return [int(i) for i in ordered["index"]]


def order_tasks(tasks: Sequence[Task], tz=None) -> List[int]:
    """Permutation of input indices in scheduling order."""
    if tz is None:
        # read naive due dates in the zone of the first aware one
        tz = next((getattr(t.due_date, "tzinfo", None) for t in tasks
                   if getattr(t.due_date, "tzinfo", None) is not None), None)
    return order_frame(build_tasks_frame(tasks, tz))
