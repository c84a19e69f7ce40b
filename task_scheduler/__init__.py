"""
Deterministic task scheduling engine.

Orders tasks by due date, priority and duration, then packs them end to end
into working-hour windows starting from "now".
"""

from .errors import InvalidInput
from .models import (
    OverflowPolicy,
    Priority,
    ScheduledSlot,
    ScheduleResult,
    Task,
    TimeSlot,
    Violation,
    WorkWindow,
)
from .ordering import order_tasks
from .scheduler import generate_schedule
from .transport import suggest_task_schedule

__version__ = "0.1.0"
