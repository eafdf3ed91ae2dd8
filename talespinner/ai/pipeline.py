"""Staged story generation.

A story is built in four dependent model calls:

1. prompt analysis (genres, themes, extra requests, ...)
2. story metadata (title, entities, setting, plot points)
3. segment plan, whose schema only accepts entity names from step 2
4. segment content, one call per planned segment, in order, each seeing
   the segment written right before it
"""

import logging
from typing import Any, Callable, List, Optional, Sequence

from pydantic import BaseModel

from ..core.story import (
    GeneratedSegment,
    PromptAnalysis,
    SegmentContent,
    Story,
    StoryMetadata,
    segment_plan_schema,
)
from . import prompts

logger = logging.getLogger(__name__)

ANALYSIS = "Prompt analysis"
METADATA = "Story metadata"
SEGMENTS = "Story segments"

CONTINUE_METADATA = "Do you want to continue with story metadata?"
CONTINUE_SEGMENTS = "Do you want to continue with the story segments?"
CONTINUE_CONTENT = "Do you want to continue with generating the content for each segment?"

ConfirmFn = Callable[[str], bool]
ReportFn = Callable[[str, Any], None]


def _always(_question: str) -> bool:
    return True


def _silent(_stage: str, _result: Any) -> None:
    return None


class StoryPipeline:
    """Chains the structured generation stages into a story."""

    def __init__(self, client, genres: Optional[Sequence[str]] = None):
        self.client = client
        self.genres = list(genres or [])

    async def analyze_prompt(self, prompt: str) -> PromptAnalysis:
        """Extract story attributes from the user's prompt."""
        return await self.client.generate_object(
            prompts.analysis_prompt(prompt, self.genres), PromptAnalysis, stage=ANALYSIS
        )

    async def build_metadata(self, prompt: str, analysis: PromptAnalysis) -> StoryMetadata:
        """Expand the analysis into title, entities, setting and plot points."""
        return await self.client.generate_object(
            prompts.metadata_prompt(prompt, analysis), StoryMetadata, stage=METADATA
        )

    async def plan_segments(
        self, prompt: str, analysis: PromptAnalysis, metadata: StoryMetadata
    ) -> BaseModel:
        """Plan the ordered segments of the story.

        The returned object has a ``segments`` list; every segment entity is
        guaranteed to name an entity of ``metadata``.
        """
        schema = segment_plan_schema(metadata.entity_names())
        return await self.client.generate_object(
            prompts.segments_prompt(prompt, analysis, metadata), schema, stage=SEGMENTS
        )

    async def write_segment(
        self,
        prompt: str,
        analysis: PromptAnalysis,
        metadata: StoryMetadata,
        plan: BaseModel,
        previous: Optional[GeneratedSegment] = None,
    ) -> GeneratedSegment:
        """Write the prose for one planned segment."""
        result = await self.client.generate_object(
            prompts.segment_content_prompt(prompt, analysis, metadata, plan, previous),
            SegmentContent,
            stage=f"Segment '{plan.title}'",
        )
        return GeneratedSegment(title=plan.title, content=result.content)

    async def write_segments(
        self,
        prompt: str,
        analysis: PromptAnalysis,
        metadata: StoryMetadata,
        plans: Sequence[BaseModel],
        on_segment: Optional[Callable[[BaseModel], None]] = None,
    ) -> List[GeneratedSegment]:
        """Write every segment in plan order.

        Segments are written one after another; each gets the previously
        generated segment as context.
        """
        generated: List[GeneratedSegment] = []
        for index, plan in enumerate(plans, 1):
            if on_segment:
                on_segment(plan)
            logger.info(f"Writing segment {index}/{len(plans)}: {plan.title}")
            previous = generated[-1] if generated else None
            segment = await self.write_segment(prompt, analysis, metadata, plan, previous)
            generated.append(segment)
        return generated

    async def run(
        self,
        prompt: str,
        confirm: ConfirmFn = _always,
        report: ReportFn = _silent,
        on_segment: Optional[Callable[[BaseModel], None]] = None,
    ) -> Optional[Story]:
        """Run all stages, asking before each next stage.

        Returns ``None`` as soon as ``confirm`` declines a stage.
        """
        prompt = prompt.strip()
        if not prompt:
            raise ValueError("Prompt cannot be empty")

        analysis = await self.analyze_prompt(prompt)
        report(ANALYSIS, analysis)
        if not confirm(CONTINUE_METADATA):
            return None

        metadata = await self.build_metadata(prompt, analysis)
        report(METADATA, metadata)
        if not confirm(CONTINUE_SEGMENTS):
            return None

        plan = await self.plan_segments(prompt, analysis, metadata)
        report(SEGMENTS, plan)
        if not confirm(CONTINUE_CONTENT):
            return None

        segments = await self.write_segments(prompt, analysis, metadata, plan.segments, on_segment)
        story = Story(title=metadata.title, segments=segments)
        logger.info(f"Generated '{story.title}': {len(segments)} segments, {story.word_count} words")
        return story
