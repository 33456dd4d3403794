"""Task domain models and enums."""

import re
import secrets
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from thinklink.core.config import Constants


TASK_ID_PATTERN = re.compile(rf"^[0-9a-f]{{{Constants.TASK_ID_HEX_LENGTH}}}$")


class Priority(StrEnum):
    """Task priority level."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TaskType(StrEnum):
    """Kind of record a command produces."""

    TASK = "task"
    EVENT = "event"
    NOTE = "note"


class TaskStatus(StrEnum):
    """Task lifecycle state."""

    PENDING = "pending"
    DONE = "done"


def generate_task_id() -> str:
    """Generate a collision-resistant task id (24 lowercase hex characters)."""
    return secrets.token_hex(Constants.TASK_ID_HEX_LENGTH // 2)


def is_task_id(value: str) -> bool:
    """Check whether a string has the strict task id shape."""
    return bool(TASK_ID_PATTERN.match(value))


class Task(BaseModel):
    """Task data transfer object."""

    id: str = Field(default_factory=generate_task_id, description="Opaque unique task ID")
    content: str = Field(default="", description="Human-readable task summary")
    priority: Priority = Field(default=Priority.MEDIUM, description="high, medium or low")
    category: str = Field(default="personal", description="Category drawn loosely from the lexicon")
    created: datetime = Field(default_factory=datetime.now, frozen=True, description="Creation timestamp")
    due: datetime | None = Field(default=None, description="Optional due timestamp")
    context: str | None = Field(
        default=None,
        description="Location, relationship, deadline, dependency or recurrence annotations joined by '; '",
    )
    type: TaskType = Field(default=TaskType.TASK, description="task, event or note")
    status: TaskStatus = Field(default=TaskStatus.PENDING, description="pending or done")
