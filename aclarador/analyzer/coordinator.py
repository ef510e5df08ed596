"""
Agent Coordinator - 6-Agent Pipeline

Runs the agents strictly in sequence:

1. Analyzer   (raw text, read-only)
2. Rewriter   (raw text, produces the revised text)
3. Grammar    (revised text)
4. Style      (revised text)
5. SEO        (revised text)
6. Validator  (revised text)

Findings of Rewriter, Grammar, Style and SEO are merged, in that
order, into the report's improvements list. Any agent error aborts
the run: no partial report is returned.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from ..agents import (
    AnalysisContext,
    AnalyzerAgent,
    BaseAgent,
    ClassificationResult,
    Finding,
    GrammarAgent,
    GrammarResult,
    PageMetadata,
    RewriterAgent,
    RewriteResult,
    SEOAgent,
    SEOResult,
    StageResult,
    StyleAgent,
    StyleResult,
    ValidationResult,
    ValidatorAgent,
)

logger = logging.getLogger(__name__)


ProgressCallback = Callable[[str, str], Any]

STAGE_MESSAGES = {
    "analyzer": "Analizando texto...",
    "rewriter": "Reescribiendo con IA...",
    "grammar": "Revisando gramática...",
    "style": "Analizando estilo...",
    "seo": "Evaluando SEO...",
    "validator": "Validando resultados...",
    "done": "Análisis completado",
}


@dataclass
class AnalysisReport:
    """Complete result of one pipeline run."""

    original_text: str
    final_text: str

    # Agent outputs
    analysis: ClassificationResult
    rewriting: RewriteResult
    grammar: GrammarResult
    style: StyleResult
    seo: SEOResult
    validation: ValidationResult

    # Rewriter, Grammar, Style and SEO findings in stage order
    improvements: List[Finding] = field(default_factory=list)

    duration_seconds: float = 0.0

    @property
    def quality_score(self) -> float:
        return self.validation.quality_score

    @property
    def readability_score(self) -> float:
        return self.style.readability_score

    @property
    def severity(self) -> str:
        return self.analysis.severity

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "original_text": self.original_text,
            "final_text": self.final_text,
            "analysis": self.analysis.to_dict(),
            "rewriting": self.rewriting.to_dict(),
            "grammar": self.grammar.to_dict(),
            "style": self.style.to_dict(),
            "seo": self.seo.to_dict(),
            "validation": self.validation.to_dict(),
            "improvements": [f.to_dict() for f in self.improvements],
            "duration_seconds": self.duration_seconds,
        }


class AgentCoordinator:
    """
    Orchestrates the fixed 6-agent pipeline.

    Usage:
        coordinator = AgentCoordinator()
        report = await coordinator.process_text(
            text,
            credential="gsk_...",
            metadata={"title": "..."},
            on_progress=lambda stage, message: print(stage, message),
        )

    Build one coordinator per run; concurrent runs must not share one.
    """

    STAGE_ORDER = ["analyzer", "rewriter", "grammar", "style", "seo", "validator"]

    def __init__(self, rewriter: Optional[RewriterAgent] = None):
        """
        Initialize coordinator with all 6 agents.

        Args:
            rewriter: Preconfigured rewriter (e.g., with a custom client factory)
        """
        self.analyzer = AnalyzerAgent()
        self.rewriter = rewriter or RewriterAgent()
        self.grammar = GrammarAgent()
        self.style = StyleAgent()
        self.seo = SEOAgent()
        self.validator = ValidatorAgent()

    async def process_text(
        self,
        text: str,
        credential: Optional[str] = None,
        metadata: Optional[Any] = None,
        on_progress: Optional[ProgressCallback] = None,
        is_web_page: bool = True,
    ) -> AnalysisReport:
        """
        Run the complete pipeline on one text.

        Args:
            text: Extracted page text
            credential: Groq API key
            metadata: PageMetadata or dict of page metadata
            on_progress: Called as on_progress(stage, message) before each
                stage and once with "done" at the end
            is_web_page: Whether the text comes from a web page

        Returns:
            AnalysisReport with all agent outputs

        Raises:
            MissingCredentialError: No credential for the rewrite
            RewriteServiceError: Completion service failed
        """
        start_time = datetime.now()

        if not isinstance(metadata, PageMetadata):
            metadata = PageMetadata.from_dict(metadata)

        context = AnalysisContext(
            api_credential=credential,
            is_web_page=is_web_page,
            page_metadata=metadata,
        )

        logger.info(f"Starting analysis ({len(text)} chars)")

        # Step 1: Classify the original text
        analysis = await self._run_stage(self.analyzer, text, context, on_progress)

        # Step 2: Rewrite (the only step that changes the text)
        rewriting = await self._run_stage(self.rewriter, text, context, on_progress)
        current_text = rewriting.rewritten_text or text

        improvements: List[Finding] = list(rewriting.improvements)

        # Steps 3-6 read the rewritten text
        grammar = await self._run_stage(self.grammar, current_text, context, on_progress)
        improvements.extend(grammar.issues)

        style = await self._run_stage(self.style, current_text, context, on_progress)
        improvements.extend(style.style_issues)

        seo = await self._run_stage(self.seo, current_text, context, on_progress)
        improvements.extend(seo.seo_recommendations)

        validation = await self._run_stage(self.validator, current_text, context, on_progress)

        duration = (datetime.now() - start_time).total_seconds()

        self._notify(on_progress, "done")

        logger.info(
            f"Analysis complete: {duration:.1f}s, "
            f"quality={validation.quality_score:.2f}, "
            f"readability={style.readability_score:.2f}, "
            f"severity={analysis.severity}, improvements={len(improvements)}"
        )

        return AnalysisReport(
            original_text=text,
            final_text=current_text,
            analysis=analysis,
            rewriting=rewriting,
            grammar=grammar,
            style=style,
            seo=seo,
            validation=validation,
            improvements=improvements,
            duration_seconds=duration,
        )

    async def _run_stage(
        self,
        agent: BaseAgent,
        text: str,
        context: AnalysisContext,
        on_progress: Optional[ProgressCallback],
    ) -> StageResult:
        """Announce, run and time one stage."""
        self._notify(on_progress, agent.name)
        logger.info(f"Stage started: {agent.name}")
        started = datetime.now()

        result = await agent.analyze(text, context)

        elapsed = (datetime.now() - started).total_seconds()
        logger.info(f"Stage finished: {agent.name} ({elapsed:.2f}s)")
        return result

    def _notify(self, on_progress: Optional[ProgressCallback], stage: str) -> None:
        """Invoke the progress callback; its errors never reach the pipeline."""
        if on_progress is None:
            return
        try:
            on_progress(stage, STAGE_MESSAGES[stage])
        except Exception as e:
            logger.warning(f"Progress callback failed at stage '{stage}': {e}")

    def get_available_agents(self) -> Dict[str, List[str]]:
        """Get capabilities of every agent keyed by stage name."""
        return {stage: getattr(self, stage).get_capabilities() for stage in self.STAGE_ORDER}
