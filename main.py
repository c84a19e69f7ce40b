# demo.py
import logging
from datetime import time

import matplotlib.dates as mdates
import matplotlib.pyplot as plt
import pandas as pd

from task_scheduler import OverflowPolicy, Priority, Task, WorkWindow, generate_schedule


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    TZ = "America/New_York"

    # Monday mid-morning (tz-aware)
    now = pd.Timestamp("2025-11-03 10:15").tz_localize(TZ)

    window = WorkWindow(
        start=time(9, 0),
        end=time(18, 0),
        weekdays=(0, 1, 2, 3, 4),
        overflow=OverflowPolicy.NO_SPLIT,
        tz=TZ,
    )

    tasks = [
        Task(
            id="dw1",
            description="Deep Work: Project",
            due_date=pd.Timestamp("2025-11-04 17:00").tz_localize(TZ),
            priority=Priority.HIGH,
            estimated_time_to_completion=180,
        ),
        Task(
            id="study1",
            description="Study: OS",
            due_date=pd.Timestamp("2025-11-04 17:00").tz_localize(TZ),
            priority="Medium",
            estimated_time_to_completion=120,
        ),
        Task(
            id="report",
            description="Expense report",
            due_date=pd.Timestamp("2025-11-01 12:00").tz_localize(TZ),
            priority="Low",
            estimated_time_to_completion=45,
        ),
        Task(
            id="review",
            description="Code review",
            due_date=pd.Timestamp("2025-11-07 12:00").tz_localize(TZ),
            priority="High",
            estimated_time_to_completion=420,
        ),
    ]

    result = generate_schedule(tasks, now, window)
    scheduled_df = result.to_frame(tasks)

    print("=== Schedule ===")
    print(scheduled_df)

    # Timeline of the placed slots
    starts = mdates.date2num(scheduled_df["start"].dt.tz_localize(None).dt.to_pydatetime())
    widths = (scheduled_df["end"] - scheduled_df["start"]).dt.total_seconds() / 86400
    colors = ["#d62728" if late else "#1f77b4" for late in scheduled_df["late"]]

    fig, ax = plt.subplots(figsize=(10, 3))
    ax.barh(scheduled_df["label"], widths, left=starts, color=colors)
    ax.xaxis_date()
    ax.xaxis.set_major_formatter(mdates.DateFormatter("%a %H:%M"))
    ax.set_title("Suggested Schedule (red = finishes after due date)")
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
