"""Command interpretation result models."""

from enum import StrEnum

from pydantic import BaseModel, Field

from thinklink.domain.task import Task


class CommandAction(StrEnum):
    """Classified intent of a command."""

    CREATE = "create"
    LIST = "list"
    DELETE = "delete"
    CALENDAR = "calendar"
    ERROR = "error"


class CommandRoute(StrEnum):
    """Branch of the interpreter a command is dispatched to."""

    LIST = "list"
    DELETE = "delete"
    CALENDAR = "calendar"
    CREATE = "create"
    FALLBACK = "fallback"


class ParsedCommand(BaseModel):
    """Result of interpreting a single command."""

    action: CommandAction = Field(..., description="Classified action")
    task: Task | None = Field(default=None, description="Created task, or an id-only stub for deletes")
    message: str = Field(..., description="Human-readable status message")
    suggestions: list[str] | None = Field(default=None, description="Optional follow-up suggestions")
