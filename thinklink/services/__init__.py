from thinklink.services import (
    canvas_service,
    interpreter_service,
    scoring_service,
    task_board_service,
)


__all__ = [
    "canvas_service",
    "interpreter_service",
    "scoring_service",
    "task_board_service",
]
