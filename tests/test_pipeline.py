"""Tests for the staged generation pipeline."""

import asyncio

import pytest

from talespinner.ai.pipeline import (
    CONTINUE_CONTENT,
    CONTINUE_METADATA,
    CONTINUE_SEGMENTS,
    StoryPipeline,
)
from talespinner.core import GeneratedSegment


def test_full_run_writes_every_segment(fake_client):
    """Test a session where every stage is accepted."""
    pipeline = StoryPipeline(fake_client, genres=["Fairy Tale"])
    story = asyncio.run(pipeline.run("  a lighthouse in a storm  "))

    assert story.title == "The Lantern Keeper"
    assert [s.title for s in story.segments] == ["The Warning", "Darkness"]
    assert story.segments[0].content == ["The sky turned green.", "Mira lit the lamp early."]
    assert [call["schema"] for call in fake_client.calls] == [
        "PromptAnalysis",
        "StoryMetadata",
        "SegmentPlanList",
        "SegmentContent",
        "SegmentContent",
    ]


def test_prompt_is_trimmed_and_genres_offered(fake_client):
    pipeline = StoryPipeline(fake_client, genres=["Fairy Tale", "Noir"])
    asyncio.run(pipeline.run("  a lighthouse in a storm  "))

    first = fake_client.calls[0]["prompt"]
    assert "Prompt: a lighthouse in a storm\n" in first
    assert "Fairy Tale, Noir" in first


def test_later_stages_see_earlier_results(fake_client):
    pipeline = StoryPipeline(fake_client)
    asyncio.run(pipeline.run("a lighthouse in a storm"))

    metadata_prompt = fake_client.calls[1]["prompt"]
    assert '"courage"' in metadata_prompt
    segments_prompt = fake_client.calls[2]["prompt"]
    assert '"The Lantern Keeper"' in segments_prompt
    assert '"courage"' in segments_prompt


def test_segments_get_rolling_context(fake_client):
    """Test each segment sees only the segment written before it."""
    pipeline = StoryPipeline(fake_client)
    asyncio.run(pipeline.run("a lighthouse in a storm"))

    first, second = [c["prompt"] for c in fake_client.calls if c["schema"] == "SegmentContent"]
    assert "follows up on is: No previous segment." in first
    assert '"title": "The Warning"' in first
    assert "Title: The Warning\nContent: The sky turned green.\nMira lit the lamp early." in second
    assert '"title": "Darkness"' in second


def test_report_and_confirm_order(fake_client):
    events = []

    def confirm(question):
        events.append(("confirm", question))
        return True

    def report(stage, result):
        events.append(("report", stage))

    pipeline = StoryPipeline(fake_client)
    asyncio.run(pipeline.run("a lighthouse", confirm=confirm, report=report))

    assert events == [
        ("report", "Prompt analysis"),
        ("confirm", CONTINUE_METADATA),
        ("report", "Story metadata"),
        ("confirm", CONTINUE_SEGMENTS),
        ("report", "Story segments"),
        ("confirm", CONTINUE_CONTENT),
    ]


@pytest.mark.parametrize("declined, expected_calls", [
    (CONTINUE_METADATA, 1),
    (CONTINUE_SEGMENTS, 2),
    (CONTINUE_CONTENT, 3),
])
def test_declining_stops_the_session(fake_client, declined, expected_calls):
    pipeline = StoryPipeline(fake_client)
    story = asyncio.run(pipeline.run("a lighthouse", confirm=lambda q: q != declined))

    assert story is None
    assert len(fake_client.calls) == expected_calls


def test_empty_prompt_is_rejected(fake_client):
    pipeline = StoryPipeline(fake_client)
    with pytest.raises(ValueError):
        asyncio.run(pipeline.run("   "))
    assert fake_client.calls == []


def test_segment_announcements(fake_client):
    seen = []
    pipeline = StoryPipeline(fake_client)
    asyncio.run(pipeline.run("a lighthouse", on_segment=lambda plan: seen.append(plan.title)))
    assert seen == ["The Warning", "Darkness"]


def test_write_segment_uses_previous(fake_client, analysis_payload, metadata_payload, plan_payload):
    from talespinner.core import PromptAnalysis, StoryMetadata, segment_plan_schema

    analysis = PromptAnalysis.model_validate(analysis_payload)
    metadata = StoryMetadata.model_validate(metadata_payload)
    plan = segment_plan_schema(metadata.entity_names()).model_validate(plan_payload)
    previous = GeneratedSegment(title="Before", content=["Earlier text."])

    pipeline = StoryPipeline(fake_client)
    segment = asyncio.run(
        pipeline.write_segment("a lighthouse", analysis, metadata, plan.segments[0], previous)
    )

    assert segment.title == "The Warning"
    assert "Title: Before\nContent: Earlier text." in fake_client.calls[0]["prompt"]
