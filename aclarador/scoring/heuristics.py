"""
Heuristic Helper Functions and Constants

Contains the sentence, word and pattern primitives used across
all agent calculations. Everything here is pure: same input,
same output, no I/O.
"""

import re
from typing import List, Sequence


# ============================================================================
# THRESHOLDS
# ============================================================================

LONG_SENTENCE_WORDS = 30     # Plain language: max 30 words per sentence
LONG_WORD_MIN_LENGTH = 13    # Words this long count as complex vocabulary


# ============================================================================
# PATTERNS
# ============================================================================

SENTENCE_BOUNDARY = re.compile(r"[.!?]+")
LONG_WORD = re.compile(r"\b\w{%d,}\b" % LONG_WORD_MIN_LENGTH)
PASSIVE_MARKERS = re.compile(r"\b(fue|fueron|ha sido|han sido)\b", re.IGNORECASE)
REPEATED_WORD = re.compile(r"\b(\w+)\s+\1\b", re.IGNORECASE)


# ============================================================================
# PRIMITIVES
# ============================================================================

def split_sentences(text: str) -> List[str]:
    """
    Split text into sentences on runs of '.', '!' and '?'.

    Args:
        text: Raw text

    Returns:
        Stripped, non-empty sentences in document order
    """
    if not text:
        return []
    return [s.strip() for s in SENTENCE_BOUNDARY.split(text) if s.strip()]


def word_count(sentence: str) -> int:
    """Count non-empty whitespace-separated tokens."""
    return len(sentence.split())


def average_sentence_length(sentences: Sequence[str]) -> float:
    """Mean words per sentence, 0.0 for an empty sequence."""
    if not sentences:
        return 0.0
    return sum(word_count(s) for s in sentences) / len(sentences)


def find_long_words(text: str) -> List[str]:
    """Return every word with at least LONG_WORD_MIN_LENGTH characters."""
    return LONG_WORD.findall(text or "")


def has_passive_markers(text: str) -> bool:
    """True if the text contains a Spanish passive-voice auxiliary."""
    return PASSIVE_MARKERS.search(text or "") is not None


def find_repeated_adjacent_words(text: str) -> List[str]:
    """
    Find a word immediately repeated after whitespace.

    Matching ignores case on both occurrences, so "Muy muy" counts.

    Returns:
        The matched pairs as they appear in the text (e.g. "muy muy")
    """
    return [m.group(0) for m in REPEATED_WORD.finditer(text or "")]
