"""Command interpreter: turns one free-text command into a ParsedCommand.

The detected action keyword picks a route:

- list/show -> list
- delete/remove -> delete, with an id-only task stub when a task id is present
- schedule/organize/view -> calendar placeholder
- create (or no action keyword) -> full synthesis with suggestions
- any other action (add, update, complete, ...) -> fallback synthesis that
  blends the trainable scorer with the keyword rule and still creates a task
"""

import logging
import math
import random
from collections.abc import Callable, Sequence
from datetime import datetime
from typing import assert_never

from thinklink.core.config import Constants, settings
from thinklink.core.date_parser import extract_date_time
from thinklink.core.entity_extractor import extract_context
from thinklink.core.errors import classify_error_with_response
from thinklink.core.lexicon import (
    DEFAULT_CATEGORY,
    PRIORITY_KEYWORDS,
    RELATIONSHIPS,
    URGENCY_MODIFIERS,
    count_terms,
    first_action_keyword,
    first_category_keyword,
    first_priority_keyword,
    match_patterns,
    resolve_task_type,
    sentiment_score,
    strip_known_terms,
)
from thinklink.core.logging import log_with_context, span
from thinklink.core.summarizer import capitalize_words, extract_task_name, summarize_task_name
from thinklink.core.tokenizer import normalize, tokenize
from thinklink.domain.command import CommandAction, CommandRoute, ParsedCommand
from thinklink.domain.task import Priority, Task, is_task_id
from thinklink.domain.training import TrainingStats
from thinklink.services.scoring_service import TrainableScorer


logger = logging.getLogger(__name__)

LIST_MESSAGE = "Displaying all tasks."
MISSING_ID_MESSAGE = "Please specify the task ID to delete"
CALENDAR_MESSAGE = "Calendar functionality is under development"

DUE_DATE_SUGGESTION = "Consider adding a due date for better task management"
WORK_CATEGORY_SUGGESTION = "This might be better categorized as a 'work' task"
HIGH_PRIORITY_SUGGESTION = "This task seems important. Consider marking it as high priority"
MISSING_NAME_SUGGESTION = 'Could not find a clear task name. Try quoting it, e.g. create "Buy milk"'
STATUS_SUGGESTION = "This reads like a status update. Use 'complete' with a task ID to close an existing task"

_ROUTES: dict[str, CommandRoute] = {
    "list": CommandRoute.LIST,
    "show": CommandRoute.LIST,
    "delete": CommandRoute.DELETE,
    "remove": CommandRoute.DELETE,
    "schedule": CommandRoute.CALENDAR,
    "organize": CommandRoute.CALENDAR,
    "view": CommandRoute.CALENDAR,
    "create": CommandRoute.CREATE,
}

_SECONDS_PER_DAY = 86400


def route_for(action: str) -> CommandRoute:
    """Map a detected action keyword to an interpreter route."""
    return _ROUTES.get(action, CommandRoute.FALLBACK)


def created_message(task: Task) -> str:
    return f"Created new {task.priority} priority {task.type} in {task.category} category"


class CommandInterpreter:
    """Orchestrates extraction, scoring and naming for single commands.

    The interpreter never raises from process_command: unexpected failures are
    converted into a ParsedCommand with the error action.
    """

    def __init__(
        self,
        scorer: TrainableScorer,
        *,
        rng: random.Random | None = None,
        neural_blend: float | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the interpreter.

        Args:
            scorer: Trained scorer used by the fallback route
            rng: Random source for the neural/rule priority blend
            neural_blend: Probability of using the neural priority (defaults to settings)
            clock: Source of the reference time for date resolution
        """
        self._scorer = scorer
        self._rng = rng or random.Random(settings.random_seed)
        self._neural_blend = settings.neural_blend_ratio if neural_blend is None else neural_blend
        self._clock = clock

    @property
    def scorer(self) -> TrainableScorer:
        return self._scorer

    def process_command(self, text: str) -> ParsedCommand:
        """Interpret one command.

        Args:
            text: Raw command text

        Returns:
            Parsed result. Always well formed, with the error action when
            interpretation failed unexpectedly.
        """
        with span("interpreter_service.process_command"):
            try:
                return self._dispatch(text)
            except Exception as e:
                logger.exception("Failed to interpret command: %s", text)
                response = classify_error_with_response(e)
                return ParsedCommand(action=CommandAction.ERROR, message=response.message)

    def _dispatch(self, text: str) -> ParsedCommand:
        tokens = tokenize(text)
        words = tokenize(text, stem_words=False)
        action = first_action_keyword(tokens)
        route = route_for(action)
        log_with_context(logger, "info", "Command classified", action=action, route=route)

        match route:
            case CommandRoute.LIST:
                return ParsedCommand(action=CommandAction.LIST, message=LIST_MESSAGE)
            case CommandRoute.DELETE:
                return self._delete(words)
            case CommandRoute.CALENDAR:
                return ParsedCommand(action=CommandAction.CALENDAR, message=CALENDAR_MESSAGE)
            case CommandRoute.CREATE:
                return self._create(text, tokens, words)
            case CommandRoute.FALLBACK:
                return self._fallback(text, tokens, words)
            case _:
                assert_never(route)

    def _delete(self, words: Sequence[str]) -> ParsedCommand:
        task_id = next((word for word in words if is_task_id(word)), None)
        if task_id is None:
            return ParsedCommand(action=CommandAction.DELETE, message=MISSING_ID_MESSAGE)
        return ParsedCommand(
            action=CommandAction.DELETE,
            task=Task(id=task_id),
            message=f"Deleted task with ID {task_id}",
        )

    def _create(self, text: str, tokens: Sequence[str], words: Sequence[str]) -> ParsedCommand:
        now = self._clock()
        due = extract_date_time(text, now=now)
        priority = self.calculate_smart_priority(tokens, due=due, now=now)
        task = self._build_task(text, tokens, words, priority=priority, due=due, now=now)

        suggestions: list[str] = []
        if task.due is None:
            suggestions.append(DUE_DATE_SUGGESTION)
        if task.category == DEFAULT_CATEGORY and "work" in normalize(text):
            suggestions.append(WORK_CATEGORY_SUGGESTION)
        if task.priority == Priority.HIGH and not count_terms(tokens, PRIORITY_KEYWORDS[Priority.HIGH]):
            suggestions.append(HIGH_PRIORITY_SUGGESTION)
        if task.content == Constants.DEFAULT_TASK_NAME:
            suggestions.append(MISSING_NAME_SUGGESTION)

        hits = match_patterns(normalize(text))
        if hits:
            logger.debug("Pattern hits: %s", hits)
        if "status" in hits:
            suggestions.append(STATUS_SUGGESTION)

        return ParsedCommand(
            action=CommandAction.CREATE,
            task=task,
            message=created_message(task),
            suggestions=suggestions or None,
        )

    def _fallback(self, text: str, tokens: Sequence[str], words: Sequence[str]) -> ParsedCommand:
        now = self._clock()
        task = self._build_task(
            text,
            tokens,
            words,
            priority=self.blend_priority(tokens),
            due=extract_date_time(text, now=now),
            now=now,
        )
        return ParsedCommand(action=CommandAction.CREATE, task=task, message=created_message(task))

    def _build_task(
        self,
        text: str,
        tokens: Sequence[str],
        words: Sequence[str],
        *,
        priority: Priority,
        due: datetime | None,
        now: datetime,
    ) -> Task:
        return Task(
            content=self.resolve_name(text),
            priority=priority,
            category=first_category_keyword(tokens) or DEFAULT_CATEGORY,
            created=now,
            due=due,
            context=extract_context(words, text),
            type=resolve_task_type(tokens),
        )

    def resolve_name(self, text: str) -> str:
        """Quoted names win over summarization; both come back capitalized per word."""
        quoted = extract_task_name(text)
        if quoted:
            return capitalize_words(quoted.split())
        return summarize_task_name(text)

    def calculate_smart_priority(
        self,
        tokens: Sequence[str],
        *,
        due: datetime | None = None,
        now: datetime | None = None,
    ) -> Priority:
        """Score urgency, deadline proximity, relationships and sentiment.

        Points: 2 per urgency modifier, 3 when due within 2 days or 2 when due
        within 7 days, 1 per relationship word, plus twice the sentiment score.
        A score of 6 or more is high, 4 or more is medium, anything else low.

        Args:
            tokens: Stemmed tokens of the command
            due: Resolved due date, if any
            now: Reference time for deadline proximity

        Returns:
            Priority level
        """
        score: float = Constants.URGENCY_POINTS * count_terms(tokens, URGENCY_MODIFIERS)

        if due is not None:
            reference = now or self._clock()
            days_until_due = math.ceil((due - reference).total_seconds() / _SECONDS_PER_DAY)
            if days_until_due <= Constants.DUE_SOON_DAYS:
                score += Constants.DUE_SOON_POINTS
            elif days_until_due <= Constants.DUE_THIS_WEEK_DAYS:
                score += Constants.DUE_THIS_WEEK_POINTS

        score += Constants.RELATIONSHIP_POINTS * count_terms(tokens, RELATIONSHIPS)
        score += sentiment_score(tokens) * Constants.SENTIMENT_MULTIPLIER

        if score >= Constants.HIGH_PRIORITY_SCORE:
            return Priority.HIGH
        if score >= Constants.MEDIUM_PRIORITY_SCORE:
            return Priority.MEDIUM
        return Priority.LOW

    def rule_priority(self, tokens: Sequence[str]) -> Priority:
        """Keyword lookup: the earliest priority keyword, medium when none."""
        return first_priority_keyword(tokens) or Priority.MEDIUM

    def blend_priority(self, tokens: Sequence[str]) -> Priority:
        """Pick the neural or the rule priority at random, then apply sentiment.

        Positive sentiment lifts medium to high and negative sentiment drops
        medium to low.
        """
        if self._rng.random() < self._neural_blend:
            priority = self._scorer.neural_priority(tokens)
            source = "neural"
        else:
            priority = self.rule_priority(tokens)
            source = "rule"
        logger.debug("Fallback priority %s from %s source", priority, source)

        if priority == Priority.MEDIUM:
            sentiment = sentiment_score(tokens)
            if sentiment > 0:
                return Priority.HIGH
            if sentiment < 0:
                return Priority.LOW
        return priority

    def extract_task_content(self, tokens: Sequence[str]) -> str:
        """Strip every lexicon token and return the residual description."""
        return " ".join(strip_known_terms(tokens))

    def get_training_stats(self) -> TrainingStats:
        return self._scorer.get_training_stats()

    def retrain_model(self, epochs: int | None = None) -> TrainingStats:
        """Reinitialize, retrain and persist the scorer, then report its accuracy."""
        with span("interpreter_service.retrain_model"):
            self._scorer.retrain(epochs)
            return self._scorer.get_training_stats()
