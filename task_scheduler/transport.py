# task_scheduler/transport.py
"""
Record codec for callers that speak JSON.

Tasks arrive as camelCase records with ISO-8601 due dates and slots leave as
ISO-8601 strings, in the same order as the input records.
"""
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

from .models import ScheduleResult, Task, WorkWindow
from .scheduler import generate_schedule


def _parse_due(value: Any) -> Optional[pd.Timestamp]:
    if value is None or value == "":
        return None
    ts = pd.to_datetime(value, errors="coerce")
    return None if pd.isna(ts) else ts


def _parse_minutes(value: Any) -> Any:
    # JSON clients often send whole numbers as floats
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def tasks_from_records(records: Sequence[Mapping[str, Any]]) -> List[Task]:
    return [
        Task(
            description=r.get("description"),
            due_date=_parse_due(r.get("dueDate")),
            priority=r.get("priority"),
            estimated_time_to_completion=_parse_minutes(r.get("estimatedTimeToCompletion")),
            id=r.get("id"),
        )
        for r in records
    ]


def slots_to_records(result: ScheduleResult) -> List[Dict[str, str]]:
    return [
        {"startTime": slot.start.isoformat(), "endTime": slot.end.isoformat()}
        for slot in result.by_task()
    ]


def violations_to_records(result: ScheduleResult) -> List[Dict[str, Any]]:
    return [
        {
            "index": v.task_index,
            "id": v.task_id,
            "finishTime": v.finish.isoformat(),
            "dueDate": v.due.isoformat(),
            "shortfallMinutes": v.shortfall_minutes,
        }
        for v in sorted(result.violations, key=lambda v: v.task_index)
    ]


def suggest_task_schedule(records: Sequence[Mapping[str, Any]],
                          now: Optional[Any] = None,
                          window: Optional[WorkWindow] = None) -> Dict[str, List[Dict[str, Any]]]:
    """
    Schedule tasks given as records and return `{"slots": [...], "late": [...]}`.

    `now` defaults to the current minute in the window's zone (UTC when unset).
    """
    window = window or WorkWindow()
    if now is None:
        now = pd.Timestamp.now(tz=window.tz or "UTC").floor("min")
    result = generate_schedule(tasks_from_records(records), now, window)
    return {"slots": slots_to_records(result), "late": violations_to_records(result)}
