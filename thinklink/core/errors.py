"""Error classification utilities for command interpretation and persistence."""

from enum import Enum

from pydantic import BaseModel, ValidationError


class ErrorCategory(Enum):
    """Categories of errors that can occur while interpreting commands."""

    STORAGE_UNAVAILABLE = "storage_unavailable"
    CORRUPT_WEIGHTS = "corrupt_weights"
    TASK_NOT_FOUND = "task_not_found"
    EMPTY_COMMAND = "empty_command"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    # Persistence errors
    ERR_STORAGE_UNAVAILABLE = "ERR_STORAGE_UNAVAILABLE"
    ERR_CORRUPT_WEIGHTS = "ERR_CORRUPT_WEIGHTS"

    # Task errors
    ERR_TASK_NOT_FOUND = "ERR_TASK_NOT_FOUND"

    # Command errors
    ERR_EMPTY_COMMAND = "ERR_EMPTY_COMMAND"

    # Generic errors
    ERR_UNKNOWN = "ERR_UNKNOWN"


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity


class StorageError(Exception):
    """Raised by key-value store backends when a read or write fails."""


class TaskNotFoundError(KeyError):
    """Raised when no task in the collection carries the requested id."""

    def __init__(self, task_id: str) -> None:
        super().__init__(task_id)
        self.task_id = task_id

    def __str__(self) -> str:
        return f"Task with ID {self.task_id} not found."


class EmptyCommandError(ValueError):
    """Raised by the caller layer for empty or whitespace-only commands."""


def classify_error(exception: Exception) -> ErrorCategory:
    """Classify an exception into an error category.

    Args:
        exception: The exception raised during execution

    Returns:
        The matching ErrorCategory
    """
    if isinstance(exception, StorageError):
        return ErrorCategory.STORAGE_UNAVAILABLE
    if isinstance(exception, ValidationError):
        return ErrorCategory.CORRUPT_WEIGHTS
    if isinstance(exception, TaskNotFoundError):
        return ErrorCategory.TASK_NOT_FOUND
    if isinstance(exception, EmptyCommandError):
        return ErrorCategory.EMPTY_COMMAND
    return ErrorCategory.UNKNOWN


def classify_error_with_response(exception: Exception) -> ErrorResponse:
    """Classify an error and return a structured response with recovery suggestions.

    Args:
        exception: The exception raised during execution

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    category = classify_error(exception)

    if category is ErrorCategory.STORAGE_UNAVAILABLE:
        return ErrorResponse(
            code=ErrorCode.ERR_STORAGE_UNAVAILABLE,
            message="Saved model data could not be reached.",
            suggestion="The assistant keeps working with freshly trained weights.",
            severity=ErrorSeverity.MEDIUM,
        )

    if category is ErrorCategory.CORRUPT_WEIGHTS:
        return ErrorResponse(
            code=ErrorCode.ERR_CORRUPT_WEIGHTS,
            message="Saved model data was unreadable.",
            suggestion="Run a retrain to rebuild the model weights.",
            severity=ErrorSeverity.LOW,
        )

    if category is ErrorCategory.TASK_NOT_FOUND:
        return ErrorResponse(
            code=ErrorCode.ERR_TASK_NOT_FOUND,
            message=str(exception),
            suggestion="Use `show` to list tasks and their IDs.",
            severity=ErrorSeverity.LOW,
        )

    if category is ErrorCategory.EMPTY_COMMAND:
        return ErrorResponse(
            code=ErrorCode.ERR_EMPTY_COMMAND,
            message="Please type a command.",
            suggestion='Try something like `create "Buy milk" tomorrow` or `show`.',
            severity=ErrorSeverity.LOW,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="Sorry, I couldn't understand that command.",
        suggestion="Try rephrasing it, e.g. `create a task to review the budget by Friday`.",
        severity=ErrorSeverity.MEDIUM,
    )
