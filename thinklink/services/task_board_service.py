"""In-memory task collection that applies interpreted commands.

The interpreter does not own tasks; the board is the collaborator that keeps
the current task list, applies create/delete results to it and renders the
canvas shown after each command.
"""

import logging
import threading

from pydantic import BaseModel, Field

from thinklink.core.config import settings
from thinklink.core.errors import TaskNotFoundError
from thinklink.core.logging import span
from thinklink.domain.command import CommandAction, ParsedCommand
from thinklink.domain.task import Priority, Task, TaskStatus
from thinklink.services.canvas_service import generate_advanced_canvas, generate_canvas


logger = logging.getLogger(__name__)


class BoardStats(BaseModel):
    """Task counters shown on the tasks page."""

    total: int = Field(..., description="Number of tasks")
    completed: int = Field(..., description="Tasks with status done")
    pending: int = Field(..., description="Tasks still pending")
    high_priority: int = Field(..., description="Tasks with high priority")


class BoardResult(BaseModel):
    """Outcome of applying one command to the board."""

    result: ParsedCommand
    canvas: str | None = None


class TaskBoard:
    """Thread-safe list of tasks in creation order."""

    def __init__(self, tasks: list[Task] | None = None, *, width: int | None = None) -> None:
        self._tasks: list[Task] = list(tasks or [])
        self._width = width or settings.canvas_width
        self._lock = threading.Lock()

    def list_tasks(self) -> list[Task]:
        with self._lock:
            return list(self._tasks)

    def get_task(self, task_id: str) -> Task:
        """Look up a task by id.

        Raises:
            TaskNotFoundError: If no task has that id
        """
        with self._lock:
            return self._find(task_id)

    def _find(self, task_id: str) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise TaskNotFoundError(task_id)

    def add_task(self, task: Task) -> None:
        with self._lock:
            self._tasks.append(task)

    def remove_task(self, task_id: str) -> Task:
        """Remove a task by id.

        Raises:
            TaskNotFoundError: If no task has that id
        """
        with self._lock:
            task = self._find(task_id)
            self._tasks.remove(task)
            return task

    def complete_task(self, task_id: str) -> Task:
        """Mark a task as done.

        Raises:
            TaskNotFoundError: If no task has that id
        """
        return self._replace(task_id, status=TaskStatus.DONE)

    def edit_task(self, task_id: str, content: str) -> Task:
        """Replace a task's content.

        Raises:
            TaskNotFoundError: If no task has that id
        """
        return self._replace(task_id, content=content)

    def _replace(self, task_id: str, **changes: object) -> Task:
        with self._lock:
            task = self._find(task_id)
            updated = task.model_copy(update=changes)
            self._tasks[self._tasks.index(task)] = updated
            logger.info("Task updated", extra={"task_id": task_id, "fields": sorted(changes)})
            return updated

    def get_stats(self) -> BoardStats:
        tasks = self.list_tasks()
        completed = sum(1 for task in tasks if task.status == TaskStatus.DONE)
        return BoardStats(
            total=len(tasks),
            completed=completed,
            pending=len(tasks) - completed,
            high_priority=sum(1 for task in tasks if task.priority == Priority.HIGH),
        )

    def render(self, *, advanced: bool = False) -> str:
        tasks = self.list_tasks()
        if advanced:
            return generate_advanced_canvas(tasks, self._width)
        return generate_canvas(tasks, self._width)

    def apply(self, parsed: ParsedCommand) -> BoardResult:
        """Apply an interpreted command to the board.

        Creates append the task, lists render the canvas, deletes remove the
        task with the stub's id. A delete for an unknown id replaces the
        message with a not-found notice. Other results pass through untouched.

        Args:
            parsed: Interpreter output

        Returns:
            The (possibly rewritten) result and the canvas to show, if any
        """
        with span("task_board_service.apply"):
            match parsed.action:
                case CommandAction.CREATE if parsed.task is not None:
                    self.add_task(parsed.task)
                    return BoardResult(result=parsed, canvas=self.render())
                case CommandAction.LIST:
                    return BoardResult(result=parsed, canvas=self.render())
                case CommandAction.DELETE if parsed.task is not None:
                    try:
                        self.remove_task(parsed.task.id)
                    except TaskNotFoundError as e:
                        logger.info("Delete requested for unknown task", extra={"task_id": e.task_id})
                        return BoardResult(result=parsed.model_copy(update={"message": str(e)}))
                    return BoardResult(result=parsed, canvas=self.render())
                case _:
                    return BoardResult(result=parsed)
