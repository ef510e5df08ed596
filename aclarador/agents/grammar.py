"""
Grammar Agent

Reviews the rewritten text for grammar problems. Currently detects
immediately repeated words. The text itself is returned untouched:
corrections are reported, not applied.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from .base import AnalysisContext, BaseAgent, Finding, FindingType, StageResult
from ..scoring import find_repeated_adjacent_words

logger = logging.getLogger(__name__)


@dataclass
class GrammarResult(StageResult):
    """Output of the Grammar agent."""
    issues: List[Finding] = field(default_factory=list)
    corrected_text: str = ""


class GrammarAgent(BaseAgent):
    """Grammar Agent - Flags repeated words without rewriting."""

    @property
    def name(self) -> str:
        return "grammar"

    @property
    def display_name(self) -> str:
        return "Grammar Agent"

    @property
    def capabilities(self) -> List[str]:
        return ["grammar_correction", "punctuation_fixing", "sentence_structure", "agreement_checking"]

    async def analyze(self, text: str, context: AnalysisContext) -> GrammarResult:
        return GrammarResult(
            agent=self.name,
            issues=self.find_grammar_issues(text),
            corrected_text=text,
        )

    def find_grammar_issues(self, text: str) -> List[Finding]:
        issues = []

        repeated = find_repeated_adjacent_words(text)
        if repeated:
            issues.append(Finding(
                type=FindingType.REPEATED_WORDS,
                message="Palabras repetidas",
                count=len(repeated),
                examples=repeated[:3],
                recommendation="Eliminar repeticiones innecesarias",
            ))

        return issues
