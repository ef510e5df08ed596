"""
Analysis Pipeline

AgentCoordinator runs the 6 agents in fixed order and merges their
findings into a single AnalysisReport.

Usage:
    from aclarador.analyzer import AgentCoordinator

    report = await AgentCoordinator().process_text(text, credential=api_key)
"""

from .coordinator import AgentCoordinator, AnalysisReport, ProgressCallback, STAGE_MESSAGES

__all__ = [
    "AgentCoordinator",
    "AnalysisReport",
    "ProgressCallback",
    "STAGE_MESSAGES",
]
