"""
Services Module

Business logic layer between entry points (API, scripts) and the pipeline.
"""

from .page_analysis import (
    PageAnalysisResult,
    PageAnalysisService,
    PageStats,
)

__all__ = [
    "PageAnalysisResult",
    "PageAnalysisService",
    "PageStats",
]
