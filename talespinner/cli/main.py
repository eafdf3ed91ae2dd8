"""Main CLI entry point for TaleSpinner."""

import asyncio
import logging
import sys
from typing import Optional

import click

from .. import __version__
from ..config import Settings
from ..core.genres import load_genres
from ..exceptions import TaleSpinnerError
from ..io.file_handler import FileHandler
from ..ai.prompts import to_json

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: int, log_file: Optional[str] = None) -> None:
    """Configure console and file logging."""
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)
    # SDK request logs are noisy below WARNING
    for name in ("anthropic", "httpx", "httpcore"):
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


@click.group()
@click.version_option(version=__version__)
@click.option('--config', 'config_file', type=click.Path(exists=True, dir_okay=False),
              help='YAML settings file')
@click.option('--verbose', is_flag=True, help='Enable info logging')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, config_file, verbose, debug):
    """TaleSpinner - staged AI story generation"""
    ctx.ensure_object(dict)
    try:
        settings = Settings.from_yaml(config_file) if config_file else Settings()
    except TaleSpinnerError as e:
        click.echo(f"❌ Error loading settings: {e}", err=True)
        sys.exit(1)

    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    setup_logging(level, settings.log_file or None)

    ctx.obj['settings'] = settings
    ctx.obj['file_handler'] = FileHandler()


@cli.command()
@click.option('--prompt', 'story_prompt', help='Story prompt (asked interactively if omitted)')
@click.option('--yes', '-y', is_flag=True, help='Answer yes to every confirmation')
@click.option('--output-dir', type=click.Path(file_okay=False), help='Directory for the story file')
@click.option('--model', help='Claude model name')
@click.option('--max-retries', type=click.IntRange(min=0), help='Retries per model call')
@click.option('--shape-retries', type=click.IntRange(min=0), help='Re-asks when a response has the wrong shape')
@click.option('--genres-file', type=click.Path(exists=True, dir_okay=False), help='YAML genre list')
@click.pass_context
def write(ctx, story_prompt, yes, output_dir, model, max_retries, shape_retries, genres_file):
    """Generate a story step by step from a prompt"""
    from ..ai.client import StructuredClient
    from ..ai.pipeline import StoryPipeline

    def confirm(question: str) -> bool:
        return True if yes else click.confirm(question, default=True)

    def report(stage: str, result) -> None:
        click.echo(f"{stage} result: {to_json(result)}")

    def on_segment(plan) -> None:
        click.echo(f"Segment Title: {plan.title}")

    try:
        settings = ctx.obj['settings'].with_overrides(
            output_dir=output_dir,
            model=model,
            max_retries=max_retries,
            shape_retries=shape_retries,
            genres_file=genres_file,
        )

        if story_prompt is None:
            story_prompt = click.prompt('Enter a prompt for the AI to generate a story')
        if not story_prompt.strip():
            click.echo("❌ Prompt cannot be empty", err=True)
            sys.exit(1)

        if not confirm('Do you want to start the text generation?'):
            click.echo('Text generation cancelled.')
            return

        genres = load_genres(settings.genres_file)
        client = StructuredClient(settings)
        pipeline = StoryPipeline(client, genres=genres)

        click.echo("Starting the AI text generation script...")
        story = asyncio.run(pipeline.run(story_prompt, confirm=confirm, report=report, on_segment=on_segment))
        if story is None:
            click.echo('Text generation cancelled.')
            return

        path = ctx.obj['file_handler'].write_story(story, settings.output_dir)
        click.echo("Text generation completed successfully.")
        click.echo(f"📁 File: {path}")
        click.echo(f"📝 Word count: {story.word_count:,}")

    except TaleSpinnerError as e:
        logger.error(f"Story generation failed: {e}")
        click.echo(f"❌ Error generating story: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option('--genres-file', type=click.Path(exists=True, dir_okay=False), help='YAML genre list')
@click.pass_context
def genres(ctx, genres_file):
    """List the genres offered to the model"""
    try:
        names = load_genres(genres_file or ctx.obj['settings'].genres_file)
    except TaleSpinnerError as e:
        click.echo(f"❌ Error loading genres: {e}", err=True)
        sys.exit(1)

    click.echo(f"📚 {len(names)} genres:")
    for name in names:
        click.echo(f"  • {name}")


def main():
    """Main entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
