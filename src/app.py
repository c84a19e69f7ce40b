from datetime import datetime, time

import pandas as pd
import plotly.express as px
import streamlit as st
from prometheus_client import Counter, Summary, start_http_server
from streamlit_calendar import calendar

from task_scheduler import InvalidInput, OverflowPolicy, Priority, WorkWindow, generate_schedule
from task_list import TaskList

TZ = "America/New_York"
WEEKDAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


# ✅ Create metrics only once
if "SCHEDULE_TIME" not in st.session_state:
    st.session_state.SCHEDULE_TIME = Summary(
        "schedule_generation_seconds",
        "Time spent generating a task schedule",
    )
SCHEDULE_TIME = st.session_state.SCHEDULE_TIME

if "LATE_TASKS" not in st.session_state:
    st.session_state.LATE_TASKS = Counter(
        "schedule_late_tasks_total",
        "Tasks scheduled to finish after their due date",
    )
LATE_TASKS = st.session_state.LATE_TASKS

# ✅ Start metrics server only once
if "metrics_started" not in st.session_state:
    start_http_server(8000)
    st.session_state.metrics_started = True


def datetime_input(label: str, key: str):
    """date_input + time_input pair; returns a naive datetime."""
    col_date, col_time = st.columns(2)
    with col_date:
        d = st.date_input(label + " date", key=key + "_date")
    with col_time:
        t = st.time_input(label + " time", key=key + "_time")
    return datetime.combine(d, t)


# Session State Setup
if "task_list" not in st.session_state:
    st.session_state.task_list = TaskList()
task_list = st.session_state.task_list

if "window" not in st.session_state:
    st.session_state.window = WorkWindow(tz=TZ)

if "result" not in st.session_state:
    st.session_state.result = None


# Sidebar: Working hours
st.sidebar.title("Task Scheduler")
st.sidebar.subheader("Working hours")
w = st.session_state.window
w_start = st.sidebar.number_input("Start hour", 0, 23, value=w.start.hour)
w_end = st.sidebar.number_input("End hour", 1, 23, value=w.end.hour)
w_days = st.sidebar.multiselect("Working days", WEEKDAY_NAMES,
                                default=[WEEKDAY_NAMES[d] for d in w.weekdays])
allow_spill = st.sidebar.checkbox("Let long tasks run past end of day?",
                                  value=w.overflow == OverflowPolicy.SPILL)

try:
    st.session_state.window = WorkWindow(
        start=time(int(w_start)),
        end=time(int(w_end)),
        weekdays=tuple(WEEKDAY_NAMES.index(d) for d in w_days),
        overflow=OverflowPolicy.SPILL if allow_spill else OverflowPolicy.NO_SPLIT,
        tz=TZ,
    )
except ValueError as exc:
    st.sidebar.error(str(exc))

# Add Task
st.sidebar.subheader("Add Task")
with st.sidebar.form("task_form"):
    t_label = st.text_input("Description", key="t_label")
    t_due = datetime_input("Due", key="t_due")
    t_priority = st.selectbox("Priority", [p.name.title() for p in reversed(Priority)], index=1)
    t_minutes = st.number_input("Estimated minutes", min_value=5, max_value=24 * 60, step=5, value=30)
    add_task = st.form_submit_button("Add Task")
    if add_task:
        if t_label:
            task_list.add(
                description=t_label,
                due_date=pd.Timestamp(t_due).tz_localize(TZ),
                priority=t_priority,
                minutes=int(t_minutes),
            )
            st.session_state.result = None
        else:
            st.sidebar.error("Please enter a task description.")


# Main: Task list
st.title("Tasks")

if len(task_list):
    tdf = pd.DataFrame([{
        "id": t.id,
        "description": t.description,
        "due": t.due_date,
        "priority": t.priority,
        "minutes": t.estimated_time_to_completion,
    } for t in task_list.tasks])
    st.dataframe(tdf)

    drop = st.selectbox(
        "Delete a task",
        options=[None] + list(range(len(task_list))),
        format_func=lambda pos: "-" if pos is None else f"{task_list.tasks[pos].id}: {task_list.tasks[pos].description}",
    )
    if drop is not None and st.button("Delete"):
        task_list.remove(drop)
        st.session_state.result = None
else:
    st.write("No tasks yet.")


if st.button("Suggest Schedule"):
    now = pd.Timestamp.now(tz=TZ).floor("min")
    try:
        with SCHEDULE_TIME.time():
            result = generate_schedule(task_list.tasks, now, st.session_state.window)
    except InvalidInput as exc:
        st.error(f"Could not generate schedule: {exc}")
    else:
        LATE_TASKS.inc(len(result.violations))
        st.session_state.result = result


result = st.session_state.result
if result is not None and result.slots:
    schedule_df = result.to_frame(task_list.tasks)

    st.markdown("## Suggested Schedule")

    def priority_color(p):
        if p >= 3:
            return "#d62728"  # red
        if p == 2:
            return "#1f77b4"  # blue
        return "#2ca02c"      # green

    events = []
    for _, row in schedule_df.iterrows():
        events.append({
            "title": row["label"],
            "start": pd.Timestamp(row["start"]).isoformat(),
            "end": pd.Timestamp(row["end"]).isoformat(),
            "id": row["id"],
            "color": priority_color(row["priority"]),
        })

    cal_options = {
        "initialView": "timeGridWeek",
        "slotMinTime": "06:00:00",
        "slotMaxTime": "23:00:00",
        "allDaySlot": False,
        "nowIndicator": True,
        "firstDay": 1,  # Monday
    }
    calendar(events=events, options=cal_options, key="calendar")

    fig = px.timeline(schedule_df, x_start="start", x_end="end", y="label", color="late")
    st.plotly_chart(fig, use_container_width=True)

    late_df = schedule_df[schedule_df["late"]]
    if not late_df.empty:
        st.warning(f"{len(late_df)} task(s) will finish after their due date.")
        st.dataframe(late_df[["label", "end", "shortfall_minutes"]])
else:
    st.info("Add some tasks and click **Suggest Schedule** to see the calendar.")
