"""HTTP interface for command interpretation, tasks, canvas and training."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from thinklink.core.errors import EmptyCommandError, TaskNotFoundError, classify_error_with_response
from thinklink.domain.task import Task
from thinklink.domain.training import TrainingStats
from thinklink.services.interpreter_service import CommandInterpreter
from thinklink.services.task_board_service import BoardResult, BoardStats, TaskBoard


logger = logging.getLogger(__name__)

router = APIRouter(tags=["commands"])


class CommandRequest(BaseModel):
    """Raw command text from a terminal or chat input."""

    text: str = Field(..., description="Free-text command")


class RetrainRequest(BaseModel):
    """Optional epoch cap for a forced retrain."""

    epochs: int | None = Field(default=None, ge=1, description="Epoch cap (defaults to settings)")


def get_interpreter(request: Request) -> CommandInterpreter:
    return request.app.state.interpreter


def get_board(request: Request) -> TaskBoard:
    return request.app.state.board


def require_command_text(text: str) -> str:
    """Reject blank commands before they reach the interpreter.

    Raises:
        EmptyCommandError: If the text is empty or whitespace only
    """
    stripped = text.strip()
    if not stripped:
        raise EmptyCommandError("Command text is empty")
    return stripped


@router.post("/commands", response_model=BoardResult)
async def post_command(
    body: CommandRequest,
    interpreter: CommandInterpreter = Depends(get_interpreter),
    board: TaskBoard = Depends(get_board),
) -> BoardResult:
    """Interpret a command and apply it to the task board."""
    try:
        text = require_command_text(body.text)
    except EmptyCommandError as e:
        raise HTTPException(
            status_code=422,
            detail=classify_error_with_response(e).message,
        ) from e

    parsed = interpreter.process_command(text)
    logger.info("Command processed", extra={"action": parsed.action})
    return board.apply(parsed)


@router.get("/tasks", response_model=list[Task])
async def list_tasks(board: TaskBoard = Depends(get_board)) -> list[Task]:
    return board.list_tasks()


@router.get("/tasks/stats", response_model=BoardStats)
async def get_task_stats(board: TaskBoard = Depends(get_board)) -> BoardStats:
    return board.get_stats()


@router.post("/tasks/{task_id}/complete", response_model=Task)
async def complete_task(task_id: str, board: TaskBoard = Depends(get_board)) -> Task:
    """Mark a task as done."""
    try:
        return board.complete_task(task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.get("/canvas", response_class=PlainTextResponse)
async def get_canvas(advanced: bool = False, board: TaskBoard = Depends(get_board)) -> str:
    """Render the current task set as text."""
    return board.render(advanced=advanced)


@router.get("/training/stats", response_model=TrainingStats)
async def get_training_stats(interpreter: CommandInterpreter = Depends(get_interpreter)) -> TrainingStats:
    return interpreter.get_training_stats()


@router.post("/training/retrain", response_model=TrainingStats)
async def retrain_model(
    body: RetrainRequest,
    interpreter: CommandInterpreter = Depends(get_interpreter),
) -> TrainingStats:
    """Reinitialize and retrain the scorer, then report its accuracy."""
    logger.info("Retrain requested", extra={"epochs": body.epochs})
    return interpreter.retrain_model(body.epochs)
