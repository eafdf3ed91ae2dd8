"""Shared fixtures for TaleSpinner tests."""

import copy

import pytest


ANALYSIS = {
    "type": "Short Story",
    "genres": ["Fairy Tale", "Adventure"],
    "themes": ["courage"],
    "extra_requests": ["Keep it under a thousand words"],
    "user_info": [],
    "topic_information": [],
}

METADATA = {
    "title": "The Lantern Keeper",
    "entities": [
        {
            "name": "Mira",
            "description": "A young lighthouse keeper.",
            "role": "protagonist",
            "traits": ["curious"],
            "strengths": ["brave"],
            "weaknesses": ["impatient"],
            "motivation": "Keep the light burning through the storm.",
        },
        {
            "name": "The Storm",
            "description": "A living tempest.",
            "role": "antagonist",
            "traits": ["relentless"],
            "strengths": ["overwhelming force"],
            "weaknesses": ["fades at dawn"],
            "motivation": "Swallow the coast.",
        },
    ],
    "setting": {
        "location": "A rocky island lighthouse",
        "time_period": "Late 1800s",
        "atmosphere": "dark and windswept",
    },
    "plot_points": ["The storm arrives", "The light goes out", "Mira relights it"],
}

PLAN = {
    "segments": [
        {
            "title": "The Warning",
            "entities": [{"name": "Mira", "mood": "uneasy"}],
            "setting": {"location": "The lamp room"},
            "memories": [],
            "importance": 6,
            "ideas": ["Mira sees the clouds gather"],
        },
        {
            "title": "Darkness",
            "entities": [{"name": "Mira", "mood": "afraid"}, {"name": "The Storm", "mood": "furious"}],
            "setting": {"location": "The spiral stairs"},
            "memories": ["Her father's advice"],
            "importance": 9,
            "ideas": ["The lamp fails", "Mira climbs in the dark"],
        },
    ]
}


class FakeStructuredClient:
    """Stands in for StructuredClient, answering from canned payloads per schema name."""

    def __init__(self, payloads):
        self.payloads = {name: list(items) for name, items in payloads.items()}
        self.calls = []

    async def generate_object(self, prompt, schema, stage=""):
        self.calls.append({"schema": schema.__name__, "prompt": prompt, "stage": stage})
        payload = self.payloads[schema.__name__].pop(0)
        return schema.model_validate(payload)


@pytest.fixture
def analysis_payload():
    return copy.deepcopy(ANALYSIS)


@pytest.fixture
def metadata_payload():
    return copy.deepcopy(METADATA)


@pytest.fixture
def plan_payload():
    return copy.deepcopy(PLAN)


@pytest.fixture
def fake_client(analysis_payload, metadata_payload, plan_payload):
    return FakeStructuredClient({
        "PromptAnalysis": [analysis_payload],
        "StoryMetadata": [metadata_payload],
        "SegmentPlanList": [plan_payload],
        "SegmentContent": [
            {"content": ["The sky turned green.", "Mira lit the lamp early."]},
            {"content": ["The glass shattered."]},
        ],
    })


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep tests away from real keys, log files and output folders."""
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test-key")
    monkeypatch.setenv("TALESPINNER_LOG_FILE", "")
    monkeypatch.setenv("TALESPINNER_OUTPUT_DIR", str(tmp_path / "data"))
    for name in ("TALESPINNER_MODEL", "TALESPINNER_MAX_TOKENS", "TALESPINNER_MAX_RETRIES", "TALESPINNER_SHAPE_RETRIES",
                 "TALESPINNER_TEMPERATURE", "TALESPINNER_GENRES_FILE"):
        monkeypatch.delenv(name, raising=False)
