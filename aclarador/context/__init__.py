"""
Page Context

Acquires the text and metadata the pipeline analyzes.
"""

from .extractor import ExtractionError, ExtractionResult, PageExtractor

__all__ = [
    "ExtractionError",
    "ExtractionResult",
    "PageExtractor",
]
