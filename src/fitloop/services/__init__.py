"""Core services: session cycle, progress analysis and prompt composition."""

from .progress_analysis import ProgressAnalyzer
from .prompt_composer import PromptComposer, extract_metadata

__all__ = [
    "extract_metadata",
    "ProgressAnalyzer",
    "PromptComposer",
]
