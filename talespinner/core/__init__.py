"""Core domain models for TaleSpinner."""

from .story import (
    StoryType,
    PromptAnalysis,
    Entity,
    Setting,
    StoryMetadata,
    SegmentSetting,
    SegmentContent,
    GeneratedSegment,
    Story,
    segment_plan_schema,
)
from .genres import load_genres

__all__ = [
    "StoryType",
    "PromptAnalysis",
    "Entity",
    "Setting",
    "StoryMetadata",
    "SegmentSetting",
    "SegmentContent",
    "GeneratedSegment",
    "Story",
    "segment_plan_schema",
    "load_genres",
]
