"""
SEO Agent

Reviews page metadata and keyword usage of the rewritten text:
- Title length (max 60 characters)
- Meta description presence and length (max 160 characters)
- Frequently repeated keywords
- Clarity / SEO balance
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List

from .base import AnalysisContext, BaseAgent, Finding, FindingType, StageResult
from ..scoring import average_sentence_length, split_sentences

logger = logging.getLogger(__name__)


MAX_TITLE_LENGTH = 60
MAX_DESCRIPTION_LENGTH = 160
KEYWORD_MIN_LENGTH = 5        # Tokens must be longer than 4 characters
KEYWORD_MAX_FREQUENCY = 3     # More occurrences than this is flagged
MAX_KEYWORDS_REPORTED = 5

# Fixed until keyword data is wired in
BASE_SEO_SCORE = 0.70
BASE_BALANCE_SCORE = 0.65


@dataclass
class ClarityBalance:
    """Balance between search optimisation and plain language."""
    seo_score: float = 0.0
    clarity_score: float = 0.0
    balance_score: float = 0.0


@dataclass
class SEOResult(StageResult):
    """Output of the SEO agent."""
    seo_recommendations: List[Finding] = field(default_factory=list)
    clarity_balance: ClarityBalance = field(default_factory=ClarityBalance)


class SEOAgent(BaseAgent):
    """SEO Agent - Metadata review and clarity/SEO balance."""

    @property
    def name(self) -> str:
        return "seo"

    @property
    def display_name(self) -> str:
        return "SEO Agent"

    @property
    def capabilities(self) -> List[str]:
        return [
            "keyword_optimization",
            "meta_description_review",
            "clarity_seo_balance",
            "search_intent_preservation",
        ]

    async def analyze(self, text: str, context: AnalysisContext) -> SEOResult:
        return SEOResult(
            agent=self.name,
            seo_recommendations=self.analyze_seo_elements(text, context),
            clarity_balance=self.assess_clarity_balance(text),
        )

    def analyze_seo_elements(self, text: str, context: AnalysisContext) -> List[Finding]:
        recommendations = []
        metadata = context.page_metadata

        title = metadata.title or ""
        if len(title) > MAX_TITLE_LENGTH:
            recommendations.append(Finding(
                type=FindingType.SEO_TITLE,
                element="title",
                message=(
                    f"Título demasiado largo ({len(title)} caracteres). "
                    f"Máximo recomendado: {MAX_TITLE_LENGTH}."
                ),
                reason="Los títulos largos se cortan en resultados de búsqueda",
            ))

        description = metadata.description or ""
        if not description:
            recommendations.append(Finding(
                type=FindingType.SEO_META_DESCRIPTION,
                element="meta_description",
                message="Falta la meta descripción",
                reason="La meta descripción mejora la visibilidad en buscadores",
            ))
        elif len(description) > MAX_DESCRIPTION_LENGTH:
            recommendations.append(Finding(
                type=FindingType.SEO_META_DESCRIPTION,
                element="meta_description",
                message=(
                    f"Meta descripción demasiado larga ({len(description)} caracteres). "
                    f"Máximo: {MAX_DESCRIPTION_LENGTH}."
                ),
                reason="Las descripciones largas se truncan en resultados",
            ))

        frequent = self.find_frequent_keywords(text)
        if frequent:
            recommendations.append(Finding(
                type=FindingType.SEO_KEYWORD_DENSITY,
                element="keywords",
                message=f"Palabras clave frecuentes: {', '.join(frequent)}",
                examples=frequent,
                reason="Equilibrar densidad de palabras clave con variedad",
            ))

        return recommendations

    def find_frequent_keywords(self, text: str) -> List[str]:
        """Words longer than 4 characters used more than 3 times, first-seen order."""
        words = [w for w in (text or "").lower().split() if len(w) >= KEYWORD_MIN_LENGTH]
        frequency: Dict[str, int] = Counter(words)
        repeated = [word for word, count in frequency.items() if count > KEYWORD_MAX_FREQUENCY]
        return repeated[:MAX_KEYWORDS_REPORTED]

    def assess_clarity_balance(self, text: str) -> ClarityBalance:
        sentences = split_sentences(text)
        if not sentences:
            return ClarityBalance()

        avg = average_sentence_length(sentences)
        # Floor at 0 only: very short sentences score above 1
        clarity = max(0.0, 1 - (avg - 15) / 30)

        return ClarityBalance(
            seo_score=BASE_SEO_SCORE,
            clarity_score=round(clarity, 2),
            balance_score=BASE_BALANCE_SCORE,
        )
