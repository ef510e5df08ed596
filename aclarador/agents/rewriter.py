"""
Rewriter Agent

The only agent with an external side effect and the only one that
changes the text. Detects coarse clarity issues, builds a rewrite
prompt and asks the Groq completion API for a plain-language version.

The system prompt encodes the plain-language rules of the
Manual de Estilo del Gobierno de Aragón.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .base import AnalysisContext, BaseAgent, Finding, FindingType, StageResult
from ..integrations.groq import GroqClient, MissingCredentialError
from ..scoring import (
    LONG_SENTENCE_WORDS,
    average_sentence_length,
    find_long_words,
    has_passive_markers,
    split_sentences,
    word_count,
)
from ..utils.config import Settings

logger = logging.getLogger(__name__)


# ============================================================================
# SYSTEM PROMPT
# ============================================================================

SYSTEM_PROMPT = """Eres un experto en lenguaje claro basado en el Manual de Estilo del Gobierno de Aragón.

PRINCIPIOS FUNDAMENTALES:
1. Expresar UNA SOLA IDEA por oración
2. Máximo 30 palabras por oración
3. Usar voz activa
4. Vocabulario común y preciso
5. Puntuación estratégica

CORRECCIONES ESPECÍFICAS:
- Eliminar muletillas ("es decir", "o sea")
- Evitar redundancias
- Simplificar lenguaje burocrático
- Sustituir nominalizaciones por verbos
- Convertir pasiva a activa

ADAPTACIÓN DIGITAL:
- Párrafos cortos
- Subtítulos descriptivos
- Formato escaneable
- Optimización SEO

Analiza el texto y proporciona mejoras específicas."""


REWRITE_GOAL = "Reescribe el siguiente texto aplicando principios de lenguaje claro."

ISSUE_DIRECTIVES = {
    "long_sentences": "- Hay oraciones largas (>30 palabras). Divídelas.",
    "passive_voice": "- Convierte voz pasiva a activa.",
    "complex_vocabulary": "- Simplifica vocabulario complejo.",
}

# Minimum drop in words per sentence reported as an improvement
SENTENCE_REDUCTION_THRESHOLD = 3


@dataclass
class RewriteResult(StageResult):
    """Output of the Rewriter agent."""
    original_text: str = ""
    rewritten_text: str = ""
    improvements: List[Finding] = field(default_factory=list)
    issues_detected: List[str] = field(default_factory=list)


class RewriterAgent(BaseAgent):
    """
    Rewriter Agent - Plain-language rewrite through Groq.

    Responsibilities:
    - Detect long sentences, passive voice and complex vocabulary
    - Build a targeted rewrite prompt
    - Call the completion API once (no retries)
    - Report structural improvements of the rewrite
    """

    MAX_OUTPUT_TOKENS = 2000
    TEMPERATURE = 0.3

    def __init__(
        self,
        client_factory: Optional[Callable[[str], GroqClient]] = None,
        settings: Optional[Settings] = None,
    ):
        """
        Initialize the rewriter.

        Args:
            client_factory: Builds a GroqClient for a given API key
            settings: Settings passed to the default client factory
        """
        self.settings = settings
        self.client_factory = client_factory or self._default_client

    @property
    def name(self) -> str:
        return "rewriter"

    @property
    def display_name(self) -> str:
        return "Rewriter Agent"

    @property
    def capabilities(self) -> List[str]:
        return [
            "comprehensive_rewriting",
            "clarity_enhancement",
            "structure_improvement",
            "plain_language_conversion",
        ]

    async def analyze(self, text: str, context: AnalysisContext) -> RewriteResult:
        api_key = (context.api_credential or "").strip()
        if not api_key:
            raise MissingCredentialError()

        issues = self.detect_issues(text)
        prompt = self.build_rewrite_prompt(text, issues)

        logger.info(f"[{self.name}] Requesting rewrite ({len(text)} chars, issues={issues})")

        async with self.client_factory(api_key) as client:
            rewritten = await client.complete(
                prompt,
                system=SYSTEM_PROMPT,
                temperature=self.TEMPERATURE,
                max_tokens=self.MAX_OUTPUT_TOKENS,
            )

        improvements = self.identify_improvements(text, rewritten)

        return RewriteResult(
            agent=self.name,
            original_text=text,
            rewritten_text=rewritten,
            improvements=improvements,
            issues_detected=issues,
        )

    def _default_client(self, api_key: str) -> GroqClient:
        return GroqClient(api_key=api_key, settings=self.settings)

    # =========================================================================
    # PROMPT PREPARATION
    # =========================================================================

    def detect_issues(self, text: str) -> List[str]:
        issues = []

        if any(word_count(s) > LONG_SENTENCE_WORDS for s in split_sentences(text)):
            issues.append("long_sentences")
        if has_passive_markers(text):
            issues.append("passive_voice")
        if find_long_words(text):
            issues.append("complex_vocabulary")

        return issues

    def build_rewrite_prompt(self, text: str, issues: List[str]) -> str:
        lines = [REWRITE_GOAL, ""]
        lines.extend(ISSUE_DIRECTIVES[issue] for issue in issues if issue in ISSUE_DIRECTIVES)
        lines.append("")
        lines.append(f"Texto original:\n{text}")
        return "\n".join(lines)

    # =========================================================================
    # IMPROVEMENT DETECTION
    # =========================================================================

    def identify_improvements(self, original: str, rewritten: str) -> List[Finding]:
        """
        Compare original and rewritten text.

        Reports sentence splitting and a drop of more than
        SENTENCE_REDUCTION_THRESHOLD words in the mean sentence length.
        """
        improvements = []

        original_sentences = split_sentences(original)
        rewritten_sentences = split_sentences(rewritten)

        if len(rewritten_sentences) > len(original_sentences):
            improvements.append(Finding(
                type=FindingType.STRUCTURE_CHANGE,
                message="Oraciones divididas para mayor claridad",
                reason="Una idea por oración (máximo 30 palabras)",
            ))

        original_avg = average_sentence_length(original_sentences)
        rewritten_avg = average_sentence_length(rewritten_sentences)

        if rewritten_avg < original_avg - SENTENCE_REDUCTION_THRESHOLD:
            improvements.append(Finding(
                type=FindingType.SENTENCE_LENGTH,
                message=f"Reducción promedio: {original_avg:.1f} → {rewritten_avg:.1f} palabras",
                reason="Mejor legibilidad con oraciones más cortas",
                metrics={
                    "original_average": round(original_avg, 1),
                    "rewritten_average": round(rewritten_avg, 1),
                },
            ))

        return improvements
