"""
Validator Agent

Final stage. Scores the rewritten text sentence by sentence and
runs four plain-language compliance checks.

Quality score per sentence:
- 15-25 words: 1.0 (optimal)
- 10-30 words: 0.7
- otherwise:   0.3
"""

import logging
from dataclasses import dataclass, field
from typing import List

from .base import AnalysisContext, BaseAgent, Finding, FindingType, StageResult
from ..scoring import (
    LONG_SENTENCE_WORDS,
    average_sentence_length,
    split_sentences,
    word_count,
)

logger = logging.getLogger(__name__)


OPTIMAL_RANGE = (15, 25)
ACCEPTABLE_RANGE = (10, LONG_SENTENCE_WORDS)


@dataclass
class ComplianceCheck:
    """A single pass/fail plain-language criterion."""
    criterion: str
    passed: bool


@dataclass
class ValidationResult(StageResult):
    """Output of the Validator agent."""
    validation: List[Finding] = field(default_factory=list)
    quality_score: float = 0.0  # 0.0 - 1.0
    compliance: List[ComplianceCheck] = field(default_factory=list)


def _in_range(value: int, bounds) -> bool:
    low, high = bounds
    return low <= value <= high


class ValidatorAgent(BaseAgent):
    """Validator Agent - Quality assurance and final scoring."""

    @property
    def name(self) -> str:
        return "validator"

    @property
    def display_name(self) -> str:
        return "Validator Agent"

    @property
    def capabilities(self) -> List[str]:
        return ["quality_assurance", "compliance_verification", "final_review", "scoring"]

    async def analyze(self, text: str, context: AnalysisContext) -> ValidationResult:
        result = ValidationResult(
            agent=self.name,
            validation=self.validate_sentences(text),
            quality_score=self.calculate_quality_score(text),
            compliance=self.check_compliance(text),
        )
        logger.debug(f"[{self.name}] quality={result.quality_score:.2f}")
        return result

    def validate_sentences(self, text: str) -> List[Finding]:
        validations = []

        for idx, sentence in enumerate(split_sentences(text), start=1):
            words = word_count(sentence)
            if words > LONG_SENTENCE_WORDS:
                validations.append(Finding(
                    type=FindingType.SENTENCE_LENGTH,
                    status="warning",
                    message=f"Oración {idx} excede 30 palabras ({words})",
                    sentence_index=idx,
                    word_count=words,
                    recommendation="Considerar dividir la oración",
                ))
            elif _in_range(words, OPTIMAL_RANGE):
                validations.append(Finding(
                    type=FindingType.SENTENCE_LENGTH,
                    status="success",
                    message=f"Oración {idx} tiene longitud óptima ({words} palabras)",
                    sentence_index=idx,
                    word_count=words,
                ))

        return validations

    @staticmethod
    def sentence_contribution(words: int) -> float:
        if _in_range(words, ACCEPTABLE_RANGE):
            return 1.0 if _in_range(words, OPTIMAL_RANGE) else 0.7
        return 0.3

    def calculate_quality_score(self, text: str) -> float:
        sentences = split_sentences(text)
        if not sentences:
            return 0.0

        total = sum(self.sentence_contribution(word_count(s)) for s in sentences)
        return round(total / len(sentences), 2)

    def check_compliance(self, text: str) -> List[ComplianceCheck]:
        sentences = split_sentences(text)

        return [
            ComplianceCheck("Oraciones completas", len(sentences) > 0),
            ComplianceCheck(
                "Longitud promedio adecuada",
                average_sentence_length(sentences) <= LONG_SENTENCE_WORDS,
            ),
            ComplianceCheck("Puntuación apropiada", any(p in text for p in ".!?")),
            ComplianceCheck("Contenido no vacío", len(text.strip()) > 0),
        ]
