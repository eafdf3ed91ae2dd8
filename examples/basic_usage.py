"""Basic usage example for TaleSpinner."""

import asyncio

from talespinner import FileHandler, Settings, StoryPipeline, StructuredClient, load_genres


async def main():
    """Example of non-interactive story generation."""

    # Set up AI client (requires ANTHROPIC_API_KEY environment variable)
    settings = Settings()
    client = StructuredClient(settings)
    pipeline = StoryPipeline(client, genres=load_genres())

    # Run every stage without asking for confirmation
    story = await pipeline.run(
        "A retired lighthouse keeper must relight the lamp during the worst storm in a century",
        report=lambda stage, result: print(f"{stage} done"),
    )

    path = FileHandler().write_story(story, settings.output_dir)
    print(f"Wrote '{story.title}' to {path}")


if __name__ == "__main__":
    asyncio.run(main())
