"""Story models for each generation stage.

Every model doubles as the JSON schema the language model must answer with,
so field descriptions are written for the model, not for developers.
"""

from enum import Enum
from typing import Annotated, List, Literal, Sequence, Type

from pydantic import BaseModel, Field, create_model


def _text(max_length: int):
    return Annotated[str, Field(max_length=max_length)]


class StoryType(str, Enum):
    """Kind of story to write."""
    SHORT_STORY = "Short Story"


class PromptAnalysis(BaseModel):
    """Structured reading of the user's free-text prompt."""

    type: StoryType = Field(description="The type of story to write.")
    genres: List[_text(100)] = Field(
        min_length=1,
        max_length=10,
        description="Select one or more genres for the story.",
    )
    themes: List[_text(100)] = Field(
        min_length=1,
        max_length=5,
        description="Select one or more themes for the story.",
    )
    extra_requests: List[_text(500)] = Field(
        default_factory=list,
        max_length=5,
        description="Any extra requests or details to include in the story.",
    )
    user_info: List[_text(200)] = Field(
        default_factory=list,
        max_length=3,
        description=(
            "Any information about the users style of writing, preferences, or other "
            "details that can help the AI to write a better story."
        ),
    )
    topic_information: List[_text(500)] = Field(
        default_factory=list,
        max_length=5,
        description=(
            "Any information about the topic of the story, such as historical context, "
            "cultural references, or other relevant details."
        ),
    )


class Entity(BaseModel):
    """A character or other acting entity of the story."""

    name: str = Field(max_length=50, description="The name of the entity.")
    description: str = Field(max_length=500, description="A short description of the entity.")
    role: str = Field(
        max_length=100,
        description="The role of the entity in the story, e.g. protagonist, antagonist, sidekick, etc.",
    )
    traits: List[_text(200)] = Field(
        min_length=1, max_length=5,
        description="A list of traits or characteristics of the entity.",
    )
    strengths: List[_text(200)] = Field(
        min_length=1, max_length=5,
        description="A list of strengths or positive attributes of the entity.",
    )
    weaknesses: List[_text(200)] = Field(
        min_length=1, max_length=5,
        description="A list of weaknesses or negative attributes of the entity.",
    )
    motivation: str = Field(
        max_length=200,
        description="The motivation or goal of the entity in the story.",
    )


class Setting(BaseModel):
    """Where and when the story happens."""

    location: str = Field(max_length=200, description="The main location or setting of the story.")
    time_period: str = Field(max_length=100, description="The time period in which the story takes place.")
    atmosphere: str = Field(
        max_length=200,
        description="The overall atmosphere or mood of the setting, e.g. dark, whimsical, futuristic, etc.",
    )


class StoryMetadata(BaseModel):
    """Title, cast, setting and plot of the story."""

    title: str = Field(max_length=100, description="The title of the story.")
    entities: List[Entity] = Field(
        min_length=1, max_length=10,
        description="A list of entities in the story.",
    )
    setting: Setting = Field(description="The setting of the story.")
    plot_points: List[_text(500)] = Field(
        min_length=1, max_length=10,
        description="A list of key plot points or events that will occur in the story.",
    )

    def entity_names(self) -> List[str]:
        """Entity names in story order, duplicates removed."""
        names: List[str] = []
        for entity in self.entities:
            if entity.name not in names:
                names.append(entity.name)
        return names


class SegmentSetting(BaseModel):
    location: str = Field(max_length=200, description="The location where this segment takes place.")


def segment_plan_schema(entity_names: Sequence[str]) -> Type[BaseModel]:
    """Build the segment plan schema for a concrete cast.

    Segment entities may only name characters that exist in the story
    metadata, so the allowed names are baked into the schema as an enum and
    checked again when the model response is validated.
    """
    names = tuple(dict.fromkeys(entity_names))
    if not names:
        raise ValueError("At least one entity name is required to plan segments")

    segment_entity = create_model(
        "SegmentEntity",
        name=(
            Literal[names],
            Field(
                description="The name of the entity involved in this segment.",
                json_schema_extra={"enum": list(names)},
            ),
        ),
        mood=(
            _text(100),
            Field(description="The mood of the entity in this segment, e.g. happy, sad, angry, etc."),
        ),
    )

    segment_plan = create_model(
        "SegmentPlan",
        title=(_text(100), Field(description="The title of the segment.")),
        entities=(
            List[segment_entity],
            Field(min_length=1, max_length=5, description="A list of entities involved in this segment."),
        ),
        setting=(SegmentSetting, Field(description="The setting of the segment.")),
        memories=(
            List[_text(200)],
            Field(
                default_factory=list,
                max_length=5,
                description="Any ideas or memories that are relevant to this segment.",
            ),
        ),
        importance=(
            int,
            Field(ge=1, le=10, description="The importance of this segment in the story, on a scale from 1 to 10."),
        ),
        ideas=(
            List[_text(200)],
            Field(description="A brief description of the segment, including key events or ideas."),
        ),
    )

    return create_model(
        "SegmentPlanList",
        segments=(
            List[segment_plan],
            Field(min_length=1, max_length=10, description="A list of segments in the story."),
        ),
    )


class SegmentContent(BaseModel):
    """Prose for one segment, as a list of paragraphs."""

    content: List[str] = Field(description="The generated content for the segment.")


class GeneratedSegment(BaseModel):
    """A written segment."""

    title: str
    content: List[str] = Field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(self.content)


class Story(BaseModel):
    """The finished story."""

    title: str
    segments: List[GeneratedSegment] = Field(default_factory=list)

    def render(self) -> str:
        """Render the story as the plain text output format."""
        body = "\n".join(f"## {segment.title}\n\n{segment.text}\n" for segment in self.segments)
        return f"# {self.title}\n\n{body}"

    @property
    def word_count(self) -> int:
        return sum(len(segment.text.split()) for segment in self.segments)
