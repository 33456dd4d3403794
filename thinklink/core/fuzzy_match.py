"""Fuzzy matching of tasks by content, used to resolve dependency targets."""

from collections.abc import Sequence

from thinklink.domain.task import Task


def fuzzy_match(tasks: Sequence[Task], query: str) -> Task | None:
    """Fuzzy match a single task by content.

    Priority: exact match > contains match > partial word match.

    Args:
        tasks: Tasks to search
        query: Free-text description of the wanted task

    Returns:
        Best matching task or None
    """
    matches = fuzzy_match_all(tasks, query)
    return matches[0] if matches else None


def fuzzy_match_all(tasks: Sequence[Task], query: str) -> list[Task]:
    """Fuzzy match all tasks whose content fits a query.

    Args:
        tasks: Tasks to search
        query: Free-text description of the wanted task

    Returns:
        Matching tasks from the best non-empty tier (may be empty)
    """
    query_lower = query.lower().strip()
    if not query_lower:
        return []

    # Exact match (highest priority)
    matches = [task for task in tasks if task.content.lower() == query_lower]
    if matches:
        return matches

    # Contains match, either direction
    matches = [
        task
        for task in tasks
        if task.content and (query_lower in task.content.lower() or task.content.lower() in query_lower)
    ]
    if matches:
        return matches

    # Partial word match
    query_words = set(query_lower.split())
    return [task for task in tasks if query_words & set(task.content.lower().split())]
