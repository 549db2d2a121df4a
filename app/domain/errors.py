from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    EMPTY_DESCRIPTION = "EmptyDescription"
    UNSAFE_DESCRIPTION = "UnsafeDescription"
    PAST_DATE = "PastDate"
    NOT_FOUND = "NotFound"
    PERSISTENCE = "Persistence"


class TaskError(Exception):
    """Base for every error the engine reports back to the UI."""

    code: ErrorCode
    default_message = "Task operation failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class EmptyDescriptionError(TaskError):
    code = ErrorCode.EMPTY_DESCRIPTION
    default_message = "Task description cannot be empty."


class UnsafeDescriptionError(TaskError):
    code = ErrorCode.UNSAFE_DESCRIPTION
    default_message = "Invalid input. HTML tags are not allowed."


class PastDateError(TaskError):
    code = ErrorCode.PAST_DATE
    default_message = "Past dates are not allowed. Please choose today or a future date."


class TaskNotFoundError(TaskError):
    code = ErrorCode.NOT_FOUND

    def __init__(self, task_id: int) -> None:
        self.task_id = task_id
        super().__init__(f"Task {task_id} was not found.")


class PersistenceError(TaskError):
    """Saving failed after the in-memory change was applied; ``task`` is the applied record."""

    code = ErrorCode.PERSISTENCE
    default_message = "Could not save tasks."

    def __init__(self, message: str | None = None, task=None) -> None:
        super().__init__(message)
        self.task = task
