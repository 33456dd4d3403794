"""Fixed-width text rendering of the task set.

Both renderers are pure functions of their input: the same task list always
renders to the same text.
"""

import textwrap
from collections.abc import Sequence

from thinklink.core.config import settings
from thinklink.core.entity_extractor import dependency_from_context
from thinklink.core.fuzzy_match import fuzzy_match
from thinklink.domain.task import Priority, Task


CANVAS_TITLE = "ThinkLink Canvas"
EMPTY_MESSAGE = "No tasks yet"
DEPENDENCIES_HEADER = "Dependencies:"

PRIORITY_GLYPHS: dict[Priority, str] = {
    Priority.HIGH: "▲",
    Priority.MEDIUM: "◆",
    Priority.LOW: "▼",
}


def _border(left: str, right: str, width: int) -> str:
    return left + "─" * (width - 2) + right


def _row(text: str, width: int) -> str:
    return "│ " + text.ljust(width - 4) + " │"


def group_by_category(tasks: Sequence[Task]) -> dict[str, list[Task]]:
    """Group tasks by category, keeping categories in first-seen order."""
    groups: dict[str, list[Task]] = {}
    for task in tasks:
        groups.setdefault(task.category, []).append(task)
    return groups


def _task_rows(task: Task, width: int) -> list[str]:
    inner = width - 4
    due = f" due {task.due:%Y-%m-%d}" if task.due else ""
    line = f"{PRIORITY_GLYPHS[task.priority]} {task.content}{due}"
    rows = [_row(part, width) for part in textwrap.wrap(line, width=inner, subsequent_indent="  ")]
    rows.extend(_row(part, width) for part in textwrap.wrap(f"ID: {task.id}", width=inner, initial_indent="  "))
    rows.append(_row("┄" * inner, width))
    return rows


def generate_canvas(tasks: Sequence[Task], width: int | None = None) -> str:
    """Render tasks as a bordered box grouped by category.

    Each task shows a priority glyph, its content and due date, word-wrapped
    to the box, then an indented ID line and a separator.

    Args:
        tasks: Tasks to render
        width: Total box width in characters (defaults to settings)

    Returns:
        Multi-line canvas text
    """
    width = width or settings.canvas_width
    lines = [
        _border("╭", "╮", width),
        "│" + f" {CANVAS_TITLE} ".center(width - 2) + "│",
        _border("├", "┤", width),
    ]

    groups = group_by_category(tasks)
    if not groups:
        lines.append(_row(EMPTY_MESSAGE, width))
        lines.append(_border("├", "┤", width))

    for category, category_tasks in groups.items():
        lines.append(_row(category.upper(), width))
        lines.append(_border("│", "│", width))
        for task in category_tasks:
            lines.extend(_task_rows(task, width))
        lines.append(_border("├", "┤", width))

    # The last group separator becomes the bottom border
    lines[-1] = _border("╰", "╯", width)
    return "\n".join(lines)


def dependency_lines(tasks: Sequence[Task]) -> list[str]:
    """Describe every task whose context carries a "depends on" marker.

    A dependency target that fuzzily matches another task's content is
    annotated with that task's id.
    """
    lines: list[str] = []
    for task in tasks:
        target = dependency_from_context(task.context)
        if target is None:
            continue
        others = [other for other in tasks if other.id != task.id]
        match = fuzzy_match(others, target)
        suffix = f" (ID: {match.id})" if match else ""
        lines.append(f"  {task.content} -> {target}{suffix}")
    return lines


def generate_advanced_canvas(tasks: Sequence[Task], width: int | None = None) -> str:
    """Render the canvas followed by a dependency listing."""
    canvas = generate_canvas(tasks, width)
    dependencies = dependency_lines(tasks)
    if not dependencies:
        return f"{canvas}\n{DEPENDENCIES_HEADER} none"
    return "\n".join([canvas, DEPENDENCIES_HEADER, *dependencies])
