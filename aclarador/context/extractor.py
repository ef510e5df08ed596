"""
Page Text Extractor

Fetches a web page and extracts its readable text and metadata:
- Strips non-content elements (scripts, navigation, footers, cookie banners)
- Prefers the main content area when the page marks one
- Collects block-level text once per distinct block
- Falls back to the full page text when block extraction yields little

Extraction never raises: failures are reported in ExtractionResult.
Callers turn an unsuccessful result into an ExtractionError.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx
from bs4 import BeautifulSoup

from ..agents.base import PageMetadata

logger = logging.getLogger(__name__)


class ExtractionError(Exception):
    """Raised at the caller boundary when no usable page text is available."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


@dataclass
class ExtractionResult:
    """Outcome of extracting one page."""
    success: bool
    text: str = ""
    metadata: PageMetadata = field(default_factory=PageMetadata)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"success": self.success}
        if self.success:
            result["text"] = self.text
            result["metadata"] = self.metadata.to_dict()
        else:
            result["error"] = self.error
        return result


# =============================================================================
# SELECTORS
# =============================================================================

NON_CONTENT_SELECTORS = [
    "script", "style", "noscript", "iframe", "svg",
    "nav", "footer", "header",
    '[role="navigation"]', '[role="banner"]', '[role="contentinfo"]',
    ".cookie-banner", ".cookie-consent",
    "#cookie-banner", "#cookie-consent",
]

MAIN_CONTENT_SELECTOR = (
    'main, article, [role="main"], .content, .post-content, .entry-content, .article-body'
)

BLOCK_TAGS = [
    "p", "h1", "h2", "h3", "h4", "h5", "h6",
    "li", "td", "th", "blockquote", "figcaption", "dd", "dt",
]

# Below this many characters the block extraction is considered a miss
MIN_BLOCK_TEXT_LENGTH = 100


class PageExtractor:
    """
    Fetches pages and extracts their readable text.

    Usage:
        async with PageExtractor() as extractor:
            result = await extractor.extract("https://example.es/tramite")
            if result.success:
                print(result.metadata.title, len(result.text))
    """

    def __init__(
        self,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self.client = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers={
                "User-Agent": "Mozilla/5.0 (compatible; AclaradorBot/1.0)",
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                "Accept-Language": "es-ES,es;q=0.9,en;q=0.5",
            },
            transport=transport,
        )

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def extract(self, url: str) -> ExtractionResult:
        """Fetch a page and extract its text and metadata."""
        try:
            response = await self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(f"HTTP error fetching {url}: {e.response.status_code}")
            return ExtractionResult(
                success=False,
                error=f"No se pudo acceder a la página (HTTP {e.response.status_code}).",
            )
        except httpx.RequestError as e:
            logger.warning(f"Request error fetching {url}: {e}")
            return ExtractionResult(success=False, error=f"No se pudo acceder a la página: {e}")

        return self.extract_from_html(response.text, url=str(response.url))

    def extract_from_html(self, html: str, url: str = "") -> ExtractionResult:
        """Extract text and metadata from an HTML document."""
        soup = BeautifulSoup(html or "", "html.parser")

        # Metadata comes from the untouched document
        metadata = self._extract_metadata(soup, url)

        source = soup.body or soup
        for selector in NON_CONTENT_SELECTORS:
            for element in source.select(selector):
                element.decompose()

        main = source.select_one(MAIN_CONTENT_SELECTOR)
        if main is not None:
            source = main

        seen = set()
        blocks = []
        for block in source.find_all(BLOCK_TAGS):
            block_text = block.get_text().strip()
            if block_text and block_text not in seen:
                seen.add(block_text)
                blocks.append(block_text)

        text = "\n\n".join(blocks)
        if len(text.strip()) < MIN_BLOCK_TEXT_LENGTH:
            text = source.get_text("\n")

        text = self._clean_whitespace(text)
        logger.debug(f"Extracted {len(text)} chars from {url or 'document'}")

        return ExtractionResult(success=True, text=text, metadata=metadata)

    def _extract_metadata(self, soup: BeautifulSoup, url: str) -> PageMetadata:
        def meta_content(name: str) -> str:
            tag = soup.find("meta", attrs={"name": name})
            return (tag.get("content") or "").strip() if tag else ""

        title = soup.title.get_text().strip() if soup.title else ""
        html_tag = soup.find("html")
        language = (html_tag.get("lang") or "").strip() if html_tag else ""
        h1 = soup.find("h1")

        return PageMetadata(
            title=title,
            description=meta_content("description"),
            keywords=meta_content("keywords"),
            language=language,
            url=url,
            heading_text=h1.get_text().strip() if h1 else "",
        )

    @staticmethod
    def _clean_whitespace(text: str) -> str:
        text = text.replace("\t", " ")
        text = re.sub(r" {2,}", " ", text)
        text = re.sub(r"\n{3,}", "\n\n", text)
        return text.strip()
