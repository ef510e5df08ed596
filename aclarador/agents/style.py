"""
Style Agent

Checks sentence length and passive voice on the rewritten text
and computes a readability score centred on 15 words per sentence.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from .base import AnalysisContext, BaseAgent, Finding, FindingType, StageResult
from ..scoring import (
    LONG_SENTENCE_WORDS,
    average_sentence_length,
    has_passive_markers,
    split_sentences,
    word_count,
)

logger = logging.getLogger(__name__)


IDEAL_SENTENCE_WORDS = 15
READABILITY_SPREAD = 30


@dataclass
class StyleResult(StageResult):
    """Output of the Style agent."""
    style_issues: List[Finding] = field(default_factory=list)
    readability_score: float = 0.0  # 0.0 - 1.0


class StyleAgent(BaseAgent):
    """
    Style Agent - Sentence simplification and readability.

    Readability: 1 - |avg - 15| / 30, clamped to [0, 1].
    """

    @property
    def name(self) -> str:
        return "style"

    @property
    def display_name(self) -> str:
        return "Style Agent"

    @property
    def capabilities(self) -> List[str]:
        return ["sentence_simplification", "jargon_removal", "flow_improvement", "readability_enhancement"]

    async def analyze(self, text: str, context: AnalysisContext) -> StyleResult:
        return StyleResult(
            agent=self.name,
            style_issues=self.find_style_issues(text),
            readability_score=self.calculate_readability(text),
        )

    def find_style_issues(self, text: str) -> List[Finding]:
        issues = []

        for idx, sentence in enumerate(split_sentences(text), start=1):
            words = word_count(sentence)
            if words > LONG_SENTENCE_WORDS:
                issues.append(Finding(
                    type=FindingType.SENTENCE_LENGTH,
                    message="Oración demasiado larga",
                    sentence_index=idx,
                    word_count=words,
                    recommendation="Dividir en oraciones más cortas",
                ))

        # One finding for the whole text, not per sentence
        if has_passive_markers(text):
            issues.append(Finding(
                type=FindingType.PASSIVE_VOICE,
                message="Posible voz pasiva",
                recommendation="Usar voz activa para mayor claridad",
            ))

        return issues

    def calculate_readability(self, text: str) -> float:
        sentences = split_sentences(text)
        if not sentences:
            return 0.0

        avg = average_sentence_length(sentences)
        score = 1 - abs(avg - IDEAL_SENTENCE_WORDS) / READABILITY_SPREAD
        return round(max(0.0, min(1.0, score)), 2)
