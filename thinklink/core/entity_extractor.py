"""Context, location, people and dependency extraction."""

import re
from collections.abc import Sequence

from thinklink.core.date_parser import MONTHS
from thinklink.core.lexicon import CONTEXT_PATTERNS, CONTEXTUAL, LOCATIONS, PATTERNS, RELATIONSHIPS, is_stopword


_PEOPLE = re.compile(r"\b(?:with|to|for|from|and|cc)\s+((?:[A-Z][a-z]+)(?:\s*(?:,|and|&)\s*[A-Z][a-z]+)*)")
_MENTION = re.compile(r"@([A-Za-z][\w.-]*)")
_NAME_SPLIT = re.compile(r"\s*(?:,|\band\b|&)\s*")

DEPENDENCY_MARKER = "depends on"


def _find_word(words: Sequence[str], vocabulary: tuple[str, ...]) -> str | None:
    present = set(words)
    return next((word for word in vocabulary if word in present), None)


def extract_location(words: Sequence[str]) -> str | None:
    """Return the first known location word present, in lexicon order."""
    return _find_word(words, LOCATIONS)


def extract_relationship(words: Sequence[str]) -> str | None:
    """Return the first relationship noun present ("team", "client"), in lexicon order.

    Prepositions such as "with" and "for" count toward priority scoring but are
    not reported here.
    """
    return _find_word(words, tuple(word for word in RELATIONSHIPS if word not in CONTEXTUAL))


def extract_people(text: str) -> list[str]:
    """Extract capitalized names and @mentions from raw text.

    Example:
        >>> extract_people("Lunch with Sarah and Tom, cc @dave")
        ['Sarah', 'Tom', 'dave']
    """
    people: list[str] = []
    for match in _PEOPLE.finditer(text):
        for name in _NAME_SPLIT.split(match.group(1)):
            # Weekdays, months and function words are capitalized too
            if not name or is_stopword(name.lower()) or name.lower() in MONTHS:
                continue
            if name not in people:
                people.append(name)
    for match in _MENTION.finditer(text):
        if match.group(1) not in people:
            people.append(match.group(1))
    return people


def extract_dependency(words: Sequence[str]) -> str | None:
    """Return what the command says it depends on ("after the budget review")."""
    match = PATTERNS["relation"].search(" ".join(words))
    if not match:
        return None
    target = match.group(1).strip()
    return target or None


def extract_context(words: Sequence[str], text: str | None = None) -> str | None:
    """Build the free-text context annotation for a task.

    Fragments, in order: known location, known relationship, people named in
    the raw text, then one labeled fragment per matching context pattern
    (deadline, dependency, recurring, duration).

    Args:
        words: Normalized (unstemmed) words of the command
        text: Raw command text, used for case-sensitive people extraction

    Returns:
        Fragments joined with "; ", or None when nothing was found
    """
    joined = " ".join(words)
    contexts: list[str] = []

    location = extract_location(words)
    if location:
        contexts.append(f"at: {location}")

    relationship = extract_relationship(words)
    if relationship:
        contexts.append(f"with: {relationship}")

    if text:
        people = extract_people(text)
        if people:
            contexts.append(f"people: {', '.join(people)}")

    for label, pattern in CONTEXT_PATTERNS.items():
        if label == "dependency":
            dependency = extract_dependency(words)
            if dependency:
                contexts.append(f"{DEPENDENCY_MARKER}: {dependency}")
            continue
        match = pattern.search(joined)
        if match:
            contexts.append(f"{label}: {match.group(0).strip()}")

    return "; ".join(contexts) or None


def dependency_from_context(context: str | None) -> str | None:
    """Read the dependency target back out of a task context string."""
    if not context:
        return None
    for fragment in context.split("; "):
        if fragment.startswith(f"{DEPENDENCY_MARKER}:"):
            return fragment.split(":", 1)[1].strip() or None
    return None
