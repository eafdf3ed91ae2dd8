"""
TaleSpinner - staged, AI-assisted short story drafting.
"""

__version__ = "1.0.0"

from .config import Settings
from .core import Story, StoryMetadata, PromptAnalysis, GeneratedSegment, load_genres
from .ai import StructuredClient, StoryPipeline
from .io import FileHandler

__all__ = [
    "Settings",
    "Story",
    "StoryMetadata",
    "PromptAnalysis",
    "GeneratedSegment",
    "load_genres",
    "StructuredClient",
    "StoryPipeline",
    "FileHandler",
]
