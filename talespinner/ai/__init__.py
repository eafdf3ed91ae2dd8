"""AI integration modules for TaleSpinner."""

from .client import StructuredClient
from .pipeline import StoryPipeline

__all__ = [
    "StructuredClient",
    "StoryPipeline",
]
