# task_scheduler/scheduler.py
import logging
from datetime import datetime
from typing import Optional, Sequence

from .errors import InvalidInput
from .models import ScheduleResult, Task, WorkWindow
from .ordering import order_frame
from .packing import pack_tasks
from .validation import build_tasks_frame, to_instant

logger = logging.getLogger(__name__)


def resolve_zone(now, window: WorkWindow):
    """The window's configured zone, else the zone `now` carries (None when naive)."""
    if window.tz is not None:
        return window.tz
    return getattr(now, "tzinfo", None)


def generate_schedule(tasks: Sequence[Task],
                      now: datetime,
                      window: Optional[WorkWindow] = None) -> ScheduleResult:
    """
    Give every task a non-overlapping slot inside the working windows.

    tasks: caller-owned snapshot; never mutated.
    now: earliest instant any slot may start at.
    window: working hours and overflow policy; defaults to every day 09:00-18:00
            with no splitting.

    Raises InvalidInput (no partial result) when a task breaks a precondition.
    Late tasks are reported in `violations`, not raised.
    """
    window = window or WorkWindow()
    zone = resolve_zone(now, window)
    now_ts = to_instant(now, zone)

    if not tasks:
        return ScheduleResult()

    try:
        tasks_df = build_tasks_frame(tasks, zone, window)
        order = order_frame(tasks_df)
        result = pack_tasks(tasks_df.loc[order], now_ts, window)
    except InvalidInput as exc:
        logger.warning("Rejected schedule request: %s", exc)
        raise

    logger.info("Scheduled %d tasks from %s, %d late", len(result.slots), now_ts, len(result.violations))
    return result
