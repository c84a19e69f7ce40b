# Test configuration and fixtures
import pandas as pd
import pytest

from task_scheduler import Task, WorkWindow

# 2025-11-03 is a Monday
MONDAY = "2025-11-03"


def ts(value: str) -> pd.Timestamp:
    return pd.Timestamp(value)


@pytest.fixture
def window():
    return WorkWindow()


@pytest.fixture
def make_task():
    def _make(due, minutes=30, priority="Medium", description="task", id=None):
        return Task(
            description=description,
            due_date=pd.Timestamp(due) if due is not None else None,
            priority=priority,
            estimated_time_to_completion=minutes,
            id=id,
        )
    return _make
