"""Prompt templates for each generation stage."""

import json
from typing import Any, Optional, Sequence

from pydantic import BaseModel

ASSISTANT_INTRO = "You are a helpful writing assistant for writing stories."

WRITING_RULES = """Write a detailed and engaging segment based on the above information.
Keep the content in plain text format, without any markdown or HTML tags.
Keep the content concise and focused on the segment's key events and ideas.
Do not include any additional information or context.
The segment should be based on the metadata provided.
Make sure to stick to writing rules. For example do not use the same word more than 3 times in a row, do not use the same sentence structure more than 3 times in a row, etc."""


def to_json(value: Any) -> str:
    """Pretty-print a stage result for interpolation into a prompt."""
    if isinstance(value, BaseModel):
        return value.model_dump_json(indent=2)
    return json.dumps(value, indent=2, ensure_ascii=False)


def analysis_prompt(prompt: str, genres: Optional[Sequence[str]] = None) -> str:
    text = f"""{ASSISTANT_INTRO} Use the following prompt to analyze the request by the user on what story to write.

Prompt: {prompt}
"""
    if genres:
        text += f"\nWhere they fit, prefer genres from this list: {', '.join(genres)}\n"
    return text


def metadata_prompt(prompt: str, analysis: BaseModel) -> str:
    return f"""{ASSISTANT_INTRO} Use the following prompt to generate the metadata for the story based on the analysis result.

Prompt: {prompt}
Prompt analysis result: {to_json(analysis)}
"""


def segments_prompt(prompt: str, analysis: BaseModel, metadata: BaseModel) -> str:
    return f"""{ASSISTANT_INTRO} Use the following prompt to generate the segments for the story based on the metadata.

Prompt: {prompt}
Prompt analysis result: {to_json(analysis)}
Story metadata result: {to_json(metadata)}
"""


def previous_segment_text(previous) -> str:
    """Describe the segment the next one follows up on."""
    if previous is None:
        return "No previous segment."
    return f"Title: {previous.title}\nContent: {previous.text}"


def segment_content_prompt(
    prompt: str,
    analysis: BaseModel,
    metadata: BaseModel,
    segment: BaseModel,
    previous=None,
) -> str:
    return f"""{ASSISTANT_INTRO} Use the following prompt to generate the content for the segment.

Prompt: {prompt}
Prompt analysis result: {to_json(analysis)}
Story metadata result: {to_json(metadata)}
Segment Details: {to_json(segment)}

The last segment this segment follows up on is: {previous_segment_text(previous)}

{WRITING_RULES}
"""
