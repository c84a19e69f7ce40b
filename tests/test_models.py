from datetime import date, time

import numpy as np
import pandas as pd
import pytest

from task_scheduler import OverflowPolicy, Priority, ScheduledSlot, ScheduleResult, TimeSlot, WorkWindow


class TestPriority:
    @pytest.mark.parametrize("value", ["High", "high", " HIGH ", 3, Priority.HIGH])
    def test_parse_high(self, value):
        assert Priority.parse(value) is Priority.HIGH

    def test_total_order(self):
        assert Priority.HIGH > Priority.MEDIUM > Priority.LOW

    @pytest.mark.parametrize("value", ["Urgent", 0, 4, True, 2.0, None])
    def test_parse_rejects_unknown(self, value):
        with pytest.raises(ValueError):
            Priority.parse(value)


class TestTimeSlot:
    def test_duration(self):
        slot = TimeSlot(pd.Timestamp("2025-11-03 09:00"), pd.Timestamp("2025-11-03 10:30"))
        assert slot.minutes == 90
        assert slot.duration == pd.Timedelta(minutes=90)

    def test_rejects_empty_slot(self):
        t = pd.Timestamp("2025-11-03 09:00")
        with pytest.raises(ValueError):
            TimeSlot(t, t)


class TestWorkWindow:
    def test_defaults(self):
        w = WorkWindow()
        assert w.start == time(9) and w.end == time(18)
        assert w.weekmask == "1111111"
        assert w.length_minutes == 540
        assert w.overflow is OverflowPolicy.NO_SPLIT

    def test_normalises_weekdays_and_policy(self):
        w = WorkWindow(weekdays=[4, 0, 1, 1, 2, 3], holidays=[date(2025, 12, 25)], overflow="spill")
        assert w.weekdays == (0, 1, 2, 3, 4)
        assert w.weekmask == "1111100"
        assert w.holidays == (date(2025, 12, 25),)
        assert w.overflow is OverflowPolicy.SPILL

    @pytest.mark.parametrize("kwargs", [
        {"start": time(18), "end": time(9)},
        {"start": time(9), "end": time(9)},
        {"weekdays": ()},
        {"weekdays": (0, 7)},
        {"overflow": "sometimes"},
    ])
    def test_invalid_config(self, kwargs):
        with pytest.raises(ValueError):
            WorkWindow(**kwargs)


def test_by_task_restores_input_order():
    a = TimeSlot(pd.Timestamp("2025-11-03 09:00"), pd.Timestamp("2025-11-03 09:30"))
    b = TimeSlot(pd.Timestamp("2025-11-03 09:30"), pd.Timestamp("2025-11-03 10:00"))
    result = ScheduleResult(slots=[ScheduledSlot(1, a), ScheduledSlot(0, b)])
    assert result.by_task() == [b, a]


def test_parse_accepts_numpy_integers():
    assert Priority.parse(np.int64(2)) is Priority.MEDIUM
    with pytest.raises(ValueError):
        Priority.parse(np.int64(9))
