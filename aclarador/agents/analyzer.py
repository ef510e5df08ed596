"""
Analyzer Agent

First stage of the pipeline. Reads the raw text and produces:
- Text classification (short / web / document)
- Sentence-length and vocabulary issues
- Advisory list of agents worth running
- Overall severity
"""

import logging
from dataclasses import dataclass, field
from typing import List

from .base import AnalysisContext, BaseAgent, Finding, FindingType, StageResult
from ..scoring import (
    LONG_SENTENCE_WORDS,
    find_long_words,
    split_sentences,
    word_count,
)

logger = logging.getLogger(__name__)


SHORT_TEXT_WORDS = 100
WEB_MARKERS = ("meta", "título", "SEO")


@dataclass
class ClassificationResult(StageResult):
    """Output of the Analyzer agent."""
    classification: str = "short"  # short, web, document
    issues: List[Finding] = field(default_factory=list)
    recommended_agents: List[str] = field(default_factory=list)
    severity: str = "low"  # low, medium, high


class AnalyzerAgent(BaseAgent):
    """
    Analyzer Agent - Classifies text and detects clarity issues.

    The recommended agent list is informational only. The coordinator
    always runs every stage in its fixed order.
    """

    @property
    def name(self) -> str:
        return "analyzer"

    @property
    def display_name(self) -> str:
        return "Analyzer Agent"

    @property
    def capabilities(self) -> List[str]:
        return ["text_classification", "issue_detection", "agent_routing", "severity_assessment"]

    async def analyze(self, text: str, context: AnalysisContext) -> ClassificationResult:
        classification = self.classify_text(text, context)
        issues = self.detect_issues(text)
        recommended = self.recommend_agents(classification, issues)
        severity = self.assess_severity(issues)

        logger.debug(
            f"[{self.name}] classification={classification}, "
            f"issues={len(issues)}, severity={severity}"
        )

        return ClassificationResult(
            agent=self.name,
            classification=classification,
            issues=issues,
            recommended_agents=recommended,
            severity=severity,
        )

    # =========================================================================
    # CLASSIFICATION
    # =========================================================================

    def classify_text(self, text: str, context: AnalysisContext) -> str:
        if word_count(text) < SHORT_TEXT_WORDS:
            return "short"
        # Browser content is always treated as a web page
        if context.is_web_page:
            return "web"
        if any(marker in text for marker in WEB_MARKERS):
            return "web"
        return "document"

    def detect_issues(self, text: str) -> List[Finding]:
        issues = []

        for idx, sentence in enumerate(split_sentences(text), start=1):
            words = word_count(sentence)
            if words > LONG_SENTENCE_WORDS:
                issues.append(Finding(
                    type=FindingType.SENTENCE_LENGTH,
                    message=f"Oración {idx} demasiado larga ({words} palabras)",
                    sentence_index=idx,
                    word_count=words,
                    text=sentence,
                ))

        long_words = find_long_words(text)
        if long_words:
            issues.append(Finding(
                type=FindingType.COMPLEX_VOCABULARY,
                message=f"Vocabulario complejo ({len(long_words)} palabras largas)",
                count=len(long_words),
                examples=long_words[:3],
            ))

        return issues

    def recommend_agents(self, classification: str, issues: List[Finding]) -> List[str]:
        agents = ["grammar", "validator"]

        if len(issues) > 2 or classification == "document":
            agents.insert(0, "style")

        if classification == "web":
            agents.append("seo")

        return agents

    def assess_severity(self, issues: List[Finding]) -> str:
        if len(issues) >= 3:
            return "high"
        if len(issues) >= 2:
            return "medium"
        return "low"
