"""Static lexical knowledge base and pure lookup helpers.

Every keyword is stemmed with the tokenizer's stemmer before comparison, so
lookups take stemmed tokens (``tokenize(text)``). A keyword's plural counts as
a mention too ("meetings", "finances", "studies"). Multi-word entries such as
"not urgent" or "next week" match as consecutive token runs.
"""

import re
from collections.abc import Iterable, Sequence
from functools import lru_cache

from thinklink.core.config import Constants
from thinklink.core.tokenizer import stem, stem_phrase, tokenize
from thinklink.domain.task import Priority, TaskType


PRIORITY_KEYWORDS: dict[Priority, tuple[str, ...]] = {
    Priority.HIGH: ("urgent", "important", "critical", "asap", "high", "priority", "crucial", "vital", "emergency"),
    Priority.MEDIUM: ("normal", "medium", "moderate", "standard", "regular"),
    Priority.LOW: ("low", "later", "whenever", "not urgent", "optional", "someday", "eventually"),
}

# Order matters: the scorer encodes a category as index / len(CATEGORIES).
CATEGORIES: tuple[str, ...] = (
    "work",
    "personal",
    "shopping",
    "health",
    "study",
    "finance",
    "home",
    "family",
    "project",
    "meeting",
    "travel",
    "fitness",
    "calendar",
    "goal",
    "note",
)

DEFAULT_CATEGORY = "personal"
DEFAULT_ACTION = "create"

TIME_INDICATORS: tuple[str, ...] = (
    "today",
    "tomorrow",
    "tonight",
    "next week",
    "next month",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)

ACTIONS: tuple[str, ...] = (
    "create",
    "add",
    "new",
    "delete",
    "remove",
    "update",
    "show",
    "list",
    "complete",
    "done",
    "finish",
    "edit",
    "view",
    "schedule",
    "organize",
)

CONTEXTUAL: tuple[str, ...] = ("for", "by", "at", "on", "in", "with", "to")

RELATIONSHIPS: tuple[str, ...] = (
    "with",
    "for",
    "team",
    "client",
    "boss",
    "colleague",
    "partner",
    "department",
    "group",
    "stakeholder",
    "customer",
)

LOCATIONS: tuple[str, ...] = (
    "office",
    "home",
    "remote",
    "online",
    "virtual",
    "room",
    "building",
    "site",
    "location",
)

URGENCY_MODIFIERS: tuple[str, ...] = (
    "urgent",
    "asap",
    "immediately",
    "before",
    "after",
    "deadline",
    "due",
    "must",
    "should",
    "need to",
    "required",
    "mandatory",
)

POSITIVE_WORDS: tuple[str, ...] = ("excited", "happy", "great", "good", "important")
NEGATIVE_WORDS: tuple[str, ...] = ("worried", "concerned", "bad", "difficult", "hard")

VERB_GROUPS: dict[str, tuple[str, ...]] = {
    "creation": ("create", "make", "build", "write", "draft", "design", "develop", "prepare", "add", "buy"),
    "modification": ("update", "edit", "change", "fix", "revise", "modify", "adjust", "improve", "clean"),
    "review": ("review", "check", "read", "study", "research", "analyze", "audit", "inspect", "test", "learn"),
    "completion": ("finish", "complete", "submit", "deliver", "close", "wrap", "pay", "file", "return"),
    "communication": ("call", "email", "send", "message", "contact", "meet", "discuss", "ask", "reply", "invite"),
    "planning": ("plan", "schedule", "organize", "book", "arrange", "set", "renew", "attend", "visit"),
}

TYPE_KEYWORDS: dict[TaskType, tuple[str, ...]] = {
    TaskType.EVENT: ("event", "meeting"),
    TaskType.NOTE: ("note", "document"),
}

STOPWORDS: frozenset[str] = frozenset(
    {
        "a", "an", "the", "and", "or", "but", "if", "then", "so", "of", "to", "for", "by", "at", "on", "in",
        "with", "about", "from", "into", "up", "out", "over", "my", "our", "your", "their", "his", "her", "its",
        "me", "we", "you", "they", "he", "she", "it", "i", "us", "them", "this", "that", "these", "those",
        "is", "are", "was", "were", "be", "been", "am", "do", "does", "did", "not", "no", "will", "would",
        "should", "could", "can", "must", "need", "needs", "have", "has", "had", "please", "some", "any",
        "all", "also", "just", "very", "too", "as", "there", "here", "next", "before", "after", "until",
        "task", "todo", "new",
        "today", "tomorrow", "tonight", "week", "month", "year",
        "monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday",
    }
)

# Regex pattern bank, applied to normalized (lowercased, unstemmed) text.
PATTERNS: dict[str, re.Pattern[str]] = {
    "deadline": re.compile(r"\b(?<!blocked\s)(?:by|before|due|until|deadline)\b(?:\s+(?:on\s+|the\s+)?(\w+))?"),
    "priority": re.compile(r"\b(?:(high|medium|low)\s+priority|priority\s+(high|medium|low)|p([123]))\b"),
    "time_expression": re.compile(
        r"\b(?:at\s+)?(\d{1,2})(?::(\d{2}))?\s*(am|pm)\b"
        r"|\bat\s+([01]?\d|2[0-3]):([0-5]\d)\b"
    ),
    "subject_verb_object": re.compile(
        r"\b(i|we|you|he|she|they)\s+(?:need\s+to\s+|have\s+to\s+|must\s+|will\s+)?(\w+)\s+(\w+(?:\s+\w+)?)"
    ),
    "conditional": re.compile(r"\bif\s+(.+?)(?:\s+then\b|$)"),
    "quantity": re.compile(r"\b(\d+)\s+([a-z]+)\b"),
    "status": re.compile(r"\b(done|completed|finished|in progress|started|blocked|pending)\b"),
    "relation": re.compile(
        r"\b(?:after|following|depends\s+on|blocked\s+by|waiting\s+on)\s+(?:the\s+)?(.+?)"
        r"(?=\s+(?:by|before|due|until|on|at|tomorrow|today|tonight|next|every)\b|$)"
    ),
}

# Context patterns, applied by the entity extractor.
CONTEXT_PATTERNS: dict[str, re.Pattern[str]] = {
    "deadline": PATTERNS["deadline"],
    "dependency": PATTERNS["relation"],
    "recurring": re.compile(r"\b(every\s+(?:other\s+)?\w+|daily|weekly|monthly|yearly|annually)\b"),
    "duration": re.compile(
        r"\b(?:for|during|takes?|lasting)\s+"
        r"((?:\d+|an?|one|two|three|half\s+an?)\s+(?:hours?|minutes?|mins?|days?|weeks?))\b"
    ),
}


@lru_cache(maxsize=64)
def _stemmed_terms(terms: tuple[str, ...]) -> tuple[tuple[str, ...], ...]:
    return tuple(stem_phrase(term) for term in terms)


def _plural(word: str) -> str:
    if len(word) > 3 and word.endswith("y") and word[-2] not in "aeiou":
        return word[:-1] + "ies"
    if word.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    return word + "s"


@lru_cache(maxsize=512)
def _term_forms(term: str) -> tuple[tuple[str, ...], ...]:
    """Stemmed token runs that count as a mention of ``term``.

    The stemmer strips a single suffix, so "meetings" becomes "meeting" and
    never reaches "meet". The plural of the last word is stemmed on its own and
    accepted as a second form. Plurals that collapse onto a stopword ("notes"
    stems to "not") are left out.
    """
    words = tokenize(term, stem_words=False)
    base = tuple(stem(word) for word in words)
    if not base:
        return ()
    plural = (*base[:-1], stem(_plural(words[-1])))
    if plural == base or plural[-1] in STOPWORDS:
        return (base,)
    return (base, plural)


def _match_at(tokens: Sequence[str], index: int, term: tuple[str, ...]) -> bool:
    return bool(term) and tuple(tokens[index : index + len(term)]) == term


def contains_term(tokens: Sequence[str], term: str) -> bool:
    """Check whether a (possibly multi-word) keyword, or its plural, occurs in stemmed tokens."""
    return any(_match_at(tokens, i, form) for form in _term_forms(term) for i in range(len(tokens)))


def count_terms(tokens: Sequence[str], terms: tuple[str, ...]) -> int:
    """Count how many distinct keywords from ``terms`` occur in the tokens."""
    return sum(1 for term in terms if contains_term(tokens, term))


def first_term(tokens: Sequence[str], terms: tuple[str, ...]) -> str | None:
    """Return the keyword whose match starts earliest in the tokens.

    Longer keywords win when several start at the same token.
    """
    forms = sorted(((form, term) for term in terms for form in _term_forms(term)), key=lambda pair: -len(pair[0]))
    for i in range(len(tokens)):
        for form, term in forms:
            if _match_at(tokens, i, form):
                return term
    return None


def first_priority_keyword(tokens: Sequence[str]) -> Priority | None:
    """Return the priority level of the earliest priority keyword.

    "not urgent" is matched before "urgent" because the longer phrase wins at
    the same position.
    """
    candidates = tuple(term for terms in PRIORITY_KEYWORDS.values() for term in terms)
    keyword = first_term(tokens, candidates)
    if keyword is None:
        return None
    for level, terms in PRIORITY_KEYWORDS.items():
        if keyword in terms:
            return level
    return None


def first_category_keyword(tokens: Sequence[str]) -> str | None:
    """Return the earliest category mentioned in the tokens."""
    return first_term(tokens, CATEGORIES)


def first_action_keyword(tokens: Sequence[str]) -> str:
    """Return the earliest action keyword, defaulting to ``create``."""
    return first_term(tokens, ACTIONS) or DEFAULT_ACTION


def resolve_task_type(tokens: Sequence[str]) -> TaskType:
    """Resolve the task type by keyword presence; note keywords take precedence."""
    if any(contains_term(tokens, term) for term in TYPE_KEYWORDS[TaskType.NOTE]):
        return TaskType.NOTE
    if any(contains_term(tokens, term) for term in TYPE_KEYWORDS[TaskType.EVENT]):
        return TaskType.EVENT
    return TaskType.TASK


def sentiment_score(tokens: Iterable[str]) -> float:
    """Score sentiment: +0.2 per positive token, -0.2 per negative token."""
    positive = set(_flatten(_stemmed_terms(POSITIVE_WORDS)))
    negative = set(_flatten(_stemmed_terms(NEGATIVE_WORDS)))
    score = 0.0
    for token in tokens:
        if token in positive:
            score += Constants.SENTIMENT_STEP
        if token in negative:
            score -= Constants.SENTIMENT_STEP
    return round(score, 10)


def verb_group(word: str) -> str | None:
    """Return the verb group a word belongs to, if any."""
    stemmed = stem(word)
    for group, verbs in VERB_GROUPS.items():
        if stemmed in _flatten(_stemmed_terms(verbs)):
            return group
    return None


def is_stopword(word: str) -> bool:
    return word in STOPWORDS


def _flatten(terms: Iterable[tuple[str, ...]]) -> tuple[str, ...]:
    return tuple(word for term in terms for word in term)


def _known_tables() -> tuple[tuple[str, ...], ...]:
    return (
        *PRIORITY_KEYWORDS.values(),
        CATEGORIES,
        TIME_INDICATORS,
        ACTIONS,
        CONTEXTUAL,
        POSITIVE_WORDS,
        NEGATIVE_WORDS,
    )


@lru_cache(maxsize=1)
def vocabulary() -> tuple[str, ...]:
    """Stemmed keys of every lexical table, in first-seen order.

    Multi-word entries stay whole, their stems joined by a space ("not urgent"),
    so "not" or "next" on their own are not vocabulary. These are the features
    the trainable scorer keeps weights for.
    """
    seen: dict[str, None] = {}
    for table in _known_tables():
        for term in _stemmed_terms(table):
            seen.setdefault(" ".join(term), None)
    return tuple(seen)


@lru_cache(maxsize=1)
def _vocabulary_phrases() -> tuple[tuple[str, ...], ...]:
    phrases = [tuple(key.split()) for key in vocabulary() if " " in key]
    return tuple(sorted(phrases, key=len, reverse=True))


def lexical_features(tokens: Sequence[str]) -> list[str]:
    """Group stemmed tokens into vocabulary features.

    A run of tokens spelling a multi-word entry becomes that entry's key; any
    other token stands alone.

    Example:
        >>> lexical_features(tokenize("this is not urgent"))
        ['thi', 'is', 'not urgent']
    """
    features: list[str] = []
    i = 0
    while i < len(tokens):
        phrase = next((candidate for candidate in _vocabulary_phrases() if _match_at(tokens, i, candidate)), None)
        if phrase is None:
            features.append(tokens[i])
            i += 1
        else:
            features.append(" ".join(phrase))
            i += len(phrase)
    return features


def strip_known_terms(tokens: Sequence[str]) -> list[str]:
    """Drop every lexicon entry from the tokens; multi-word entries go only as a whole."""
    known = set(vocabulary())
    return [feature for feature in lexical_features(tokens) if feature not in known]


def match_patterns(text: str) -> dict[str, str]:
    """Run the pattern bank over normalized text.

    Returns:
        Mapping of pattern name to the matched fragment, for patterns that hit
    """
    hits: dict[str, str] = {}
    for name, pattern in PATTERNS.items():
        match = pattern.search(text)
        if match:
            hits[name] = match.group(0).strip()
    return hits
