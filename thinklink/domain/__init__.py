"""Domain models and DTOs."""

from thinklink.domain.command import CommandAction, CommandRoute, ParsedCommand
from thinklink.domain.task import Priority, Task, TaskStatus, TaskType, generate_task_id, is_task_id
from thinklink.domain.training import ExpectedOutput, ScorerPrediction, TrainingSample, TrainingStats, WeightSnapshot


__all__ = [
    "CommandAction",
    "CommandRoute",
    "ExpectedOutput",
    "ParsedCommand",
    "Priority",
    "ScorerPrediction",
    "Task",
    "TaskStatus",
    "TaskType",
    "TrainingSample",
    "TrainingStats",
    "WeightSnapshot",
    "generate_task_id",
    "is_task_id",
]
