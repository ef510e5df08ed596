"""
Text Heuristics for Aclarador

Pure, deterministic helpers shared by every analysis agent:
sentence splitting, word counting and pattern matching for
passive voice, long words and repeated words.

Example Usage:
    from aclarador.scoring import split_sentences, word_count

    for sentence in split_sentences(text):
        if word_count(sentence) > LONG_SENTENCE_WORDS:
            ...
"""

from .heuristics import (
    LONG_SENTENCE_WORDS,
    LONG_WORD_MIN_LENGTH,
    average_sentence_length,
    find_long_words,
    find_repeated_adjacent_words,
    has_passive_markers,
    split_sentences,
    word_count,
)

__all__ = [
    "LONG_SENTENCE_WORDS",
    "LONG_WORD_MIN_LENGTH",
    "average_sentence_length",
    "find_long_words",
    "find_repeated_adjacent_words",
    "has_passive_markers",
    "split_sentences",
    "word_count",
]
