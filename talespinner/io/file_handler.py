"""File handling utilities."""

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, Union

import yaml

from ..exceptions import FileOperationError

if TYPE_CHECKING:
    from ..core.story import Story

logger = logging.getLogger(__name__)


class FileHandler:
    """Handles reading and writing files."""

    def write_file(self, file_path: Union[str, Path], content: str) -> None:
        """Write content to file."""
        path = Path(file_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding='utf-8')
        except OSError as e:
            raise FileOperationError(f"Failed to write {path}: {e}") from e

    def read_yaml(self, file_path: Union[str, Path]) -> Any:
        """Read YAML file."""
        path = Path(file_path)
        try:
            with path.open('r', encoding='utf-8') as f:
                return yaml.safe_load(f)
        except OSError as e:
            raise FileOperationError(f"Failed to read {path}: {e}") from e
        except yaml.YAMLError as e:
            raise FileOperationError(f"Invalid YAML in {path}: {e}") from e

    def story_path(self, output_dir: Union[str, Path], timestamp_ms: Optional[int] = None) -> Path:
        """Output path named after the current time in milliseconds."""
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        return Path(output_dir) / f"{timestamp_ms}-output.txt"

    def write_story(
        self,
        story: "Story",
        output_dir: Union[str, Path] = "data",
        timestamp_ms: Optional[int] = None,
    ) -> Path:
        """Write the rendered story and return its path."""
        path = self.story_path(output_dir, timestamp_ms)
        self.write_file(path, story.render())
        logger.info(f"Wrote {story.word_count} words to {path}")
        return path
