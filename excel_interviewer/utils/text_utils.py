"""
Text processing utilities for question keywords and answer scoring.
"""
import re
from typing import Iterable, List, Set

import nltk
from nltk.corpus import stopwords

# Words that occur in nearly every interview prompt and carry no signal for matching
INTERVIEW_STOPWORDS = frozenset({
    "could", "describe", "excel", "explain", "give", "use", "used", "using", "would",
})

_stop_words = None

_WORD_RE = re.compile(r"[a-z][a-z0-9_\-']*")
_NUMBER_RE = re.compile(r"\d+(?:\.\d+)?")
_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


def get_stopwords() -> Set[str]:
    """Get stopwords set (NLTK English list plus interview filler words), initializing if needed."""
    global _stop_words
    if _stop_words is None:
        try:
            english = stopwords.words("english")
        except LookupError:
            nltk.download("stopwords", quiet=True)
            english = stopwords.words("english")
        _stop_words = set(english) | INTERVIEW_STOPWORDS
    return _stop_words


def tokenize(text: str) -> List[str]:
    """
    Split text into lowercase word tokens.

    Args:
        text: Raw text

    Returns:
        List of word tokens (punctuation and numbers dropped)
    """
    if not text:
        return []
    return [w.strip("'-") for w in _WORD_RE.findall(text.lower()) if w.strip("'-")]


def unique(items: Iterable[str]) -> List[str]:
    """De-duplicate while keeping first-seen order."""
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


def derive_keywords(text: str, limit: int = 5) -> List[str]:
    """
    Derive matching keywords from a question prompt.

    Stopwords are removed and at most `limit` remaining content words are
    kept, in the order they appear.

    Args:
        text: Question prompt text
        limit: Maximum number of keywords

    Returns:
        List of keywords
    """
    words = [w for w in tokenize(text) if w not in get_stopwords() and len(w) > 1]
    return unique(words)[:limit]


def significant_words(text: str, min_length: int = 4) -> List[str]:
    """
    Extract significant words from an expected-answer outline.

    Args:
        text: Outline text
        min_length: Words shorter than this are dropped

    Returns:
        De-duplicated list of words of at least `min_length` characters
    """
    return unique(w for w in tokenize(text) if len(w) >= min_length)


def contains_term(text: str, term: str) -> bool:
    """Case-insensitive substring test."""
    if not text or not term:
        return False
    return term.lower() in text.lower()


def count_distinct_numbers(text: str) -> int:
    """Count distinct numeric substrings (e.g. "2", "10", "3.5") in text."""
    if not text:
        return 0
    return len(set(_NUMBER_RE.findall(text)))


def strip_code_fence(text: str) -> str:
    """
    Remove a surrounding markdown code fence from LLM output.

    Args:
        text: Raw LLM output

    Returns:
        The fenced content, or the stripped input if it is not fenced
    """
    if not text:
        return ""
    text = text.strip()
    match = _CODE_FENCE_RE.match(text)
    if match:
        return match.group(1).strip()
    return text
