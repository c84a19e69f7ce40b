# task_scheduler/models.py
import numbers
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum, IntEnum
from typing import List, Optional, Sequence, Tuple, Union

import pandas as pd


class Priority(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3

    @classmethod
    def parse(cls, value: Union["Priority", int, str]) -> "Priority":
        """Accept a Priority, its int value, or its name in any case."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"unknown priority {value!r}") from None
        if isinstance(value, numbers.Integral) and not isinstance(value, bool):
            return cls(int(value))
        raise ValueError(f"unknown priority {value!r}")


class OverflowPolicy(str, Enum):
    NO_SPLIT = "no_split"  # move the whole task into the next window
    SPILL = "spill"        # let the task run past the window end


@dataclass(frozen=True)
class Task:
    description: str
    due_date: Optional[datetime]           # naive or tz-aware
    priority: Union[Priority, int, str, None]
    estimated_time_to_completion: int      # minutes
    id: Optional[str] = None


@dataclass(frozen=True)
class TimeSlot:
    start: pd.Timestamp
    end: pd.Timestamp

    def __post_init__(self):
        if self.end <= self.start:
            raise ValueError(f"slot must end after it starts: {self.start} >= {self.end}")

    @property
    def duration(self) -> pd.Timedelta:
        return self.end - self.start

    @property
    def minutes(self) -> int:
        return int(self.duration.total_seconds() // 60)


ALL_DAYS = (0, 1, 2, 3, 4, 5, 6)


@dataclass(frozen=True)
class WorkWindow:
    start: time = time(9, 0)
    end: time = time(18, 0)
    weekdays: Tuple[int, ...] = ALL_DAYS   # Monday=0
    holidays: Tuple[date, ...] = ()
    overflow: OverflowPolicy = OverflowPolicy.NO_SPLIT
    tz: Optional[str] = None               # None -> zone of `now`

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError("working window must start before it ends on the same day")
        weekdays = tuple(sorted(set(self.weekdays)))
        if not weekdays:
            raise ValueError("at least one weekday must be eligible")
        if any(d not in ALL_DAYS for d in weekdays):
            raise ValueError(f"weekdays must be in 0..6, got {self.weekdays!r}")
        object.__setattr__(self, "weekdays", weekdays)
        object.__setattr__(self, "holidays", tuple(self.holidays))
        object.__setattr__(self, "overflow", OverflowPolicy(self.overflow))

    @property
    def weekmask(self) -> str:
        return "".join("1" if d in self.weekdays else "0" for d in ALL_DAYS)

    @property
    def length(self) -> pd.Timedelta:
        anchor = date(2000, 1, 1)
        return pd.Timestamp(datetime.combine(anchor, self.end)) - pd.Timestamp(
            datetime.combine(anchor, self.start)
        )

    @property
    def length_minutes(self) -> int:
        return int(self.length.total_seconds() // 60)


@dataclass(frozen=True)
class ScheduledSlot:
    task_index: int
    slot: TimeSlot
    task_id: Optional[str] = None

    @property
    def start(self) -> pd.Timestamp:
        return self.slot.start

    @property
    def end(self) -> pd.Timestamp:
        return self.slot.end


@dataclass(frozen=True)
class Violation:
    task_index: int
    due: pd.Timestamp
    finish: pd.Timestamp
    task_id: Optional[str] = None

    @property
    def shortfall(self) -> pd.Timedelta:
        return self.finish - self.due

    @property
    def shortfall_minutes(self) -> int:
        return int(self.shortfall.total_seconds() // 60)


@dataclass
class ScheduleResult:
    """Slots in scheduling order plus the tasks that finish after their due date."""

    slots: List[ScheduledSlot] = field(default_factory=list)
    violations: List[Violation] = field(default_factory=list)

    @property
    def late_indices(self) -> List[int]:
        return sorted(v.task_index for v in self.violations)

    def by_task(self) -> List[TimeSlot]:
        """Slots re-associated with the input list, one per task."""
        ordered = sorted(self.slots, key=lambda s: s.task_index)
        return [s.slot for s in ordered]

    def to_frame(self, tasks: Sequence[Task]) -> pd.DataFrame:
        shortfalls = {v.task_index: v.shortfall_minutes for v in self.violations}
        rows = []
        for s in self.slots:
            task = tasks[s.task_index]
            rows.append({
                "index": s.task_index,
                "id": s.task_id,
                "label": task.description,
                "start": s.start,
                "end": s.end,
                "priority": int(Priority.parse(task.priority)),
                "late": s.task_index in shortfalls,
                "shortfall_minutes": shortfalls.get(s.task_index, 0),
            })
        columns = ["index", "id", "label", "start", "end", "priority", "late", "shortfall_minutes"]
        if not rows:
            return pd.DataFrame(columns=columns)
        return pd.DataFrame(rows, columns=columns).sort_values("start").reset_index(drop=True)
