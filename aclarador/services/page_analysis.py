"""
Page Analysis Service

Caller boundary around the agent pipeline:
1. Resolve the API key (argument, settings store, environment)
2. Extract text and metadata from the page
3. Reject pages without enough text
4. Truncate to the configured character limit
5. Run a fresh AgentCoordinator on the text
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional
from urllib.parse import urlparse

from ..agents.base import PageMetadata
from ..analyzer import AgentCoordinator, AnalysisReport, ProgressCallback
from ..context import ExtractionError, PageExtractor
from ..integrations.groq import MissingCredentialError
from ..persistence import SettingsStore
from ..scoring import split_sentences
from ..utils.config import Settings, get_settings

logger = logging.getLogger(__name__)


MIN_PAGE_TEXT_LENGTH = 20
TRUNCATION_MARKER = "..."
SUPPORTED_SCHEMES = ("http", "https")


@dataclass
class PageStats:
    """Size of the extracted page text."""
    words: int = 0
    sentences: int = 0
    characters: int = 0

    @classmethod
    def from_text(cls, text: str) -> "PageStats":
        return cls(
            words=len(text.split()),
            sentences=len(split_sentences(text)),
            characters=len(text),
        )


@dataclass
class PageAnalysisResult:
    """Pipeline report plus the page it was run on."""
    report: AnalysisReport
    metadata: PageMetadata = field(default_factory=PageMetadata)
    stats: PageStats = field(default_factory=PageStats)
    truncated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "report": self.report.to_dict(),
            "metadata": self.metadata.to_dict(),
            "stats": {
                "words": self.stats.words,
                "sentences": self.stats.sentences,
                "characters": self.stats.characters,
            },
            "truncated": self.truncated,
        }


class PageAnalysisService:
    """
    Runs the plain-language analysis for a page URL or raw text.

    Usage:
        service = PageAnalysisService()
        result = await service.analyze_page("https://example.es/ayudas")
        print(result.report.final_text)
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store: Optional[SettingsStore] = None,
        extractor_factory: Optional[Callable[[], PageExtractor]] = None,
        coordinator_factory: Optional[Callable[[], AgentCoordinator]] = None,
    ):
        """
        Initialize the service.

        Args:
            settings: Settings override (defaults to environment)
            store: Settings store (defaults to SETTINGS_PATH)
            extractor_factory: Builds a PageExtractor per page
            coordinator_factory: Builds an AgentCoordinator per run
        """
        self.settings = settings or get_settings()
        self.store = store or SettingsStore(self.settings.SETTINGS_PATH)
        self.extractor_factory = extractor_factory or (
            lambda: PageExtractor(timeout=self.settings.EXTRACT_TIMEOUT)
        )
        self.coordinator_factory = coordinator_factory or AgentCoordinator

    # =========================================================================
    # ENTRY POINTS
    # =========================================================================

    async def analyze_page(
        self,
        url: str,
        credential: Optional[str] = None,
        char_limit: Optional[int] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> PageAnalysisResult:
        """
        Extract a page and run the pipeline on its text.

        Raises:
            MissingCredentialError: No API key available
            ExtractionError: Page unsupported, unreachable or without text
            RewriteServiceError: Completion service failed
        """
        api_key = self.resolve_credential(credential)
        self._check_url(url)

        async with self.extractor_factory() as extractor:
            extraction = await extractor.extract(url)

        if not extraction.success:
            raise ExtractionError(
                extraction.error or "No se pudo extraer el texto de la página.",
                url=url,
            )

        text = extraction.text or ""
        if len(text.strip()) < MIN_PAGE_TEXT_LENGTH:
            raise ExtractionError("La página no contiene suficiente texto para analizar.", url=url)

        stats = PageStats.from_text(text)
        limit = self.resolve_char_limit(char_limit)
        analyzed_text = self.truncate(text, limit)

        logger.info(
            f"Analyzing {url}: {stats.words} words, {stats.characters} chars "
            f"(limit {limit})"
        )

        coordinator = self.coordinator_factory()
        report = await coordinator.process_text(
            analyzed_text,
            credential=api_key,
            metadata=extraction.metadata,
            on_progress=on_progress,
        )

        return PageAnalysisResult(
            report=report,
            metadata=extraction.metadata,
            stats=stats,
            truncated=analyzed_text != text,
        )

    async def analyze_text(
        self,
        text: str,
        metadata: Optional[Any] = None,
        credential: Optional[str] = None,
        on_progress: Optional[ProgressCallback] = None,
    ) -> AnalysisReport:
        """Run the pipeline on caller-supplied text."""
        api_key = self.resolve_credential(credential)
        coordinator = self.coordinator_factory()
        return await coordinator.process_text(
            text,
            credential=api_key,
            metadata=metadata,
            on_progress=on_progress,
        )

    # =========================================================================
    # HELPERS
    # =========================================================================

    def resolve_credential(self, credential: Optional[str] = None) -> str:
        """API key from the argument, the settings store or GROQ_API_KEY."""
        for candidate in (credential, self.store.load().credential, self.settings.GROQ_API_KEY):
            if candidate and candidate.strip():
                return candidate.strip()
        raise MissingCredentialError("Por favor, ingresa tu clave API de Groq.")

    def resolve_char_limit(self, char_limit: Optional[int] = None) -> int:
        """Character limit from the argument, the settings store or CHAR_LIMIT."""
        if char_limit:
            return char_limit
        return self.store.load().char_limit or self.settings.CHAR_LIMIT

    @staticmethod
    def truncate(text: str, limit: int) -> str:
        if len(text) > limit:
            return text[:limit] + TRUNCATION_MARKER
        return text

    @staticmethod
    def _check_url(url: str) -> None:
        scheme = urlparse(url or "").scheme.lower()
        if scheme not in SUPPORTED_SCHEMES:
            raise ExtractionError(
                "No se puede analizar páginas internas del navegador.",
                url=url,
            )
