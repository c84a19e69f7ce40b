from typing import List

from task_scheduler import Task


class TaskList:
    """Caller-owned task snapshot for the Streamlit page.

    Ids come from a counter that only grows, so a deleted task's id is never
    handed out again.
    """

    def __init__(self):
        self.tasks: List[Task] = []
        self._next_id = 0

    def add(self, description, due_date, priority, minutes) -> Task:
        task = Task(
            id=f"t{self._next_id}",
            description=description,
            due_date=due_date,
            priority=priority,
            estimated_time_to_completion=minutes,
        )
        self._next_id += 1
        self.tasks.append(task)
        return task

    def remove(self, position: int) -> Task:
        return self.tasks.pop(position)

    def __len__(self):
        return len(self.tasks)
