"""
Base Agent Class for Aclarador

All pipeline agents inherit from this base class, which provides:
- Standard async interface: analyze(text, context) -> StageResult
- Capability listing for the coordinator
- Shared finding and context data classes

Architecture:
    BaseAgent (abstract)
    ├── AnalyzerAgent     (classification, read-only)
    ├── RewriterAgent     (Groq rewrite, the only agent that changes text)
    ├── GrammarAgent      (read-only)
    ├── StyleAgent        (read-only)
    ├── SEOAgent          (read-only)
    └── ValidatorAgent    (final scoring, read-only)
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


# ============================================================================
# ENUMS
# ============================================================================

class FindingType(str, Enum):
    """Kinds of issue or recommendation an agent can report."""
    SENTENCE_LENGTH = "sentence_length"
    COMPLEX_VOCABULARY = "complex_vocabulary"
    PASSIVE_VOICE = "passive_voice"
    REPEATED_WORDS = "repeated_words"
    SEO_TITLE = "seo_title"
    SEO_META_DESCRIPTION = "seo_meta_description"
    SEO_KEYWORD_DENSITY = "seo_keyword_density"
    STRUCTURE_CHANGE = "structure_change"


# ============================================================================
# DATA CLASSES
# ============================================================================

@dataclass
class Finding:
    """A single issue or recommendation produced by an agent."""
    type: FindingType
    message: str = ""
    sentence_index: Optional[int] = None  # 1-based
    word_count: Optional[int] = None
    text: Optional[str] = None
    count: Optional[int] = None
    examples: List[str] = field(default_factory=list)
    recommendation: Optional[str] = None
    reason: Optional[str] = None
    element: Optional[str] = None  # SEO element (title, meta_description, keywords)
    status: Optional[str] = None  # Validator status (warning, success)
    metrics: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, leaving out unset optional fields."""
        result: Dict[str, Any] = {"type": self.type.value, "message": self.message}
        for f in fields(self):
            if f.name in ("type", "message"):
                continue
            value = getattr(self, f.name)
            if value is None or value == [] or value == {}:
                continue
            result[f.name] = value
        return result


@dataclass(frozen=True)
class PageMetadata:
    """Metadata of the page the text was extracted from."""
    title: str = ""
    description: str = ""
    keywords: str = ""
    language: str = ""
    url: str = ""
    heading_text: str = ""

    # Keys used by browser-side extractors
    _ALIASES = {
        "metaDescription": "description",
        "meta_description": "description",
        "metaKeywords": "keywords",
        "meta_keywords": "keywords",
        "lang": "language",
        "h1": "heading_text",
        "headingText": "heading_text",
    }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PageMetadata":
        """Build from a dict using snake_case or browser-extractor keys."""
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        values: Dict[str, str] = {}
        for key, value in data.items():
            name = cls._ALIASES.get(key, key)
            if name not in known or value is None:
                continue
            # A non-empty value wins over an empty one under another alias
            if not values.get(name):
                values[name] = str(value)
        return cls(**values)

    def to_dict(self) -> Dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class AnalysisContext:
    """Read-only bundle shared by every agent during one run."""
    api_credential: Optional[str] = None
    is_web_page: bool = True
    page_metadata: PageMetadata = field(default_factory=PageMetadata)


@dataclass
class StageResult:
    """Base output of every agent. Subclasses add stage-specific fields."""
    agent: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {f.name: _serialize(getattr(self, f.name)) for f in fields(self)}


def _serialize(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return [_serialize(v) for v in value]
    if isinstance(value, dict):
        return {k: _serialize(v) for k, v in value.items()}
    if is_dataclass(value):
        return {f.name: _serialize(getattr(value, f.name)) for f in fields(value)}
    return value


# ============================================================================
# BASE AGENT CLASS
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for all pipeline agents.

    Each agent must implement:
    - name: Stage identifier used in progress events (e.g., 'grammar')
    - display_name: Human-readable name
    - capabilities: What the agent contributes to the report
    - analyze: (text, context) -> StageResult
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Stage identifier (e.g., 'rewriter')."""
        pass

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable name (e.g., 'Rewriter Agent')."""
        pass

    @property
    @abstractmethod
    def capabilities(self) -> List[str]:
        """Capability identifiers reported to the coordinator."""
        pass

    @abstractmethod
    async def analyze(self, text: str, context: AnalysisContext) -> StageResult:
        """
        Analyze text and return this agent's result.

        Args:
            text: Current text of the pipeline
            context: Shared read-only context

        Returns:
            Stage-specific StageResult subclass
        """
        pass

    def get_capabilities(self) -> List[str]:
        return list(self.capabilities)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
