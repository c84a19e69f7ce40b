# task_scheduler/errors.py


class InvalidInput(ValueError):
    """A task breaks a precondition the packing loop relies on.

    Raised before any slot is placed, so callers never see a partial schedule.
    """

    def __init__(self, index: int, field: str, reason: str):
        self.index = index
        self.field = field
        self.reason = reason
        super().__init__(f"task {index}: invalid {field}: {reason}")
