"""Text normalization, tokenization and suffix-stripping stemming."""

import re
from functools import lru_cache

from thinklink.core.config import Constants


_CONTRACTIONS: tuple[tuple[str, str], ...] = (
    ("n't", " not"),
    ("'re", " are"),
    ("'s", " is"),
    ("'d", " would"),
    ("'ll", " will"),
)

# Checked in order; the first suffix that leaves a long enough stem wins.
_SUFFIXES: tuple[str, ...] = ("ing", "ed", "ly", "es", "s", "ment")

_PUNCTUATION = re.compile(r"[.,/#!$%^&*;:{}=_`~()\-?\"'\[\]<>|\\+@“”‘’]")
_WHITESPACE = re.compile(r"\s+")


@lru_cache(maxsize=4096)
def stem(word: str) -> str:
    """Strip one known suffix from a word.

    The suffix is only removed when the remaining stem keeps at least
    ``Constants.MIN_STEM_LENGTH`` characters, so "is" or "as" stay intact.

    Args:
        word: Lowercased word

    Returns:
        The stemmed word
    """
    for suffix in _SUFFIXES:
        if word.endswith(suffix) and len(word) - len(suffix) >= Constants.MIN_STEM_LENGTH:
            return word[: -len(suffix)]
    return word


def normalize(text: str) -> str:
    """Lowercase text, expand contractions and strip punctuation."""
    normalized = text.lower().replace("’", "'")
    for contraction, expansion in _CONTRACTIONS:
        normalized = normalized.replace(contraction, expansion)
    return _PUNCTUATION.sub("", normalized)


def tokenize(text: str, *, stem_words: bool = True) -> list[str]:
    """Split text into normalized tokens.

    Args:
        text: Raw input text
        stem_words: Apply suffix stripping to every token

    Returns:
        Tokens in input order, never containing empty strings

    Example:
        >>> tokenize("Don't forget the meetings")
        ['do', 'not', 'forget', 'the', 'meeting']
    """
    words = [word for word in _WHITESPACE.split(normalize(text)) if word]
    if not stem_words:
        return words
    return [stem(word) for word in words]


def stem_phrase(phrase: str) -> tuple[str, ...]:
    """Tokenize and stem a (possibly multi-word) lexicon entry."""
    return tuple(tokenize(phrase))
