"""
Analysis Agents Module

6 agents, always run in this order by the AgentCoordinator:

1. AnalyzerAgent  - Classification and issue detection (raw text)
2. RewriterAgent  - Plain-language rewrite via Groq (produces the revised text)
3. GrammarAgent   - Repeated-word review
4. StyleAgent     - Sentence length, passive voice, readability
5. SEOAgent       - Metadata and keyword review
6. ValidatorAgent - Quality score and compliance checks

Usage:
    from aclarador.agents import GrammarAgent, AnalysisContext

    result = await GrammarAgent().analyze(text, AnalysisContext())
"""

from .base import (
    AnalysisContext,
    BaseAgent,
    Finding,
    FindingType,
    PageMetadata,
    StageResult,
)

from .analyzer import AnalyzerAgent, ClassificationResult
from .rewriter import RewriterAgent, RewriteResult, SYSTEM_PROMPT
from .grammar import GrammarAgent, GrammarResult
from .style import StyleAgent, StyleResult
from .seo import SEOAgent, SEOResult, ClarityBalance
from .validator import ValidatorAgent, ValidationResult, ComplianceCheck

__all__ = [
    # Base classes
    "AnalysisContext",
    "BaseAgent",
    "Finding",
    "FindingType",
    "PageMetadata",
    "StageResult",
    # Agents
    "AnalyzerAgent",
    "RewriterAgent",
    "GrammarAgent",
    "StyleAgent",
    "SEOAgent",
    "ValidatorAgent",
    # Results
    "ClassificationResult",
    "RewriteResult",
    "GrammarResult",
    "StyleResult",
    "SEOResult",
    "ClarityBalance",
    "ValidationResult",
    "ComplianceCheck",
    "SYSTEM_PROMPT",
]


def get_all_agents():
    """Get agent classes in pipeline order."""
    return [
        AnalyzerAgent,
        RewriterAgent,
        GrammarAgent,
        StyleAgent,
        SEOAgent,
        ValidatorAgent,
    ]
