"""Task naming: explicit quoted names and paragraph summarization."""

import re

from thinklink.core.config import Constants
from thinklink.core.lexicon import PRIORITY_KEYWORDS, count_terms, is_stopword, verb_group
from thinklink.core.tokenizer import tokenize
from thinklink.domain.task import Priority


_QUOTED = re.compile(r"[\"“”]([^\"“”]+)[\"“”]")
_SENTENCE_END = re.compile(r"[.!?]+")

_HIGH_KEYWORD_BONUS = 2
_MEDIUM_KEYWORD_BONUS = 1


def capitalize_words(words: list[str]) -> str:
    """Uppercase the first letter of every word, leaving the rest untouched."""
    return " ".join(word[:1].upper() + word[1:] for word in words)


def extract_task_name(text: str) -> str | None:
    """Return the trimmed contents of the first quoted substring, if any.

    Example:
        >>> extract_task_name('create "  Buy milk " task')
        'Buy milk'
    """
    match = _QUOTED.search(text)
    if not match:
        return None
    return match.group(1).strip() or None


def _candidate(words: list[str]) -> list[str]:
    for index, word in enumerate(words):
        if verb_group(word) is None:
            continue
        following = [w for w in words[index + 1 :] if not is_stopword(w)]
        return following[: Constants.SUMMARY_MAX_NAME_WORDS]
    return []


def summarize_task_name(paragraph: str) -> str:
    """Summarize free text into a short title-cased task name.

    Each sentence yields a candidate: up to five non-stopword words following
    its first recognized verb. Candidates score one point per word, plus two
    when the sentence carries a high-priority keyword and one for a medium
    keyword. The best candidate wins, ties going to the earlier sentence.

    Args:
        paragraph: Free-text description, possibly several sentences long

    Returns:
        Title-cased name, or "New Task" when nothing usable is found
    """
    sentences = [s for s in _SENTENCE_END.split(paragraph) if s.strip()]

    best: list[str] = []
    best_score = 0
    for sentence in sentences:
        candidate = _candidate(tokenize(sentence, stem_words=False))
        if not candidate:
            continue
        stemmed = tokenize(sentence)
        score = len(candidate)
        if count_terms(stemmed, PRIORITY_KEYWORDS[Priority.HIGH]):
            score += _HIGH_KEYWORD_BONUS
        if count_terms(stemmed, PRIORITY_KEYWORDS[Priority.MEDIUM]):
            score += _MEDIUM_KEYWORD_BONUS
        if score > best_score:
            best, best_score = candidate, score

    if not best and sentences:
        words = tokenize(sentences[0], stem_words=False)
        best = [w for w in words if not is_stopword(w)][: Constants.SUMMARY_FALLBACK_WORDS]

    if not best:
        return Constants.DEFAULT_TASK_NAME
    return capitalize_words(best)
