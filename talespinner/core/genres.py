"""Static catalogue of literary genres."""

import logging
from pathlib import Path
from typing import List, Optional, Union

from ..exceptions import ConfigurationError, FileOperationError
from ..io.file_handler import FileHandler

logger = logging.getLogger(__name__)

DEFAULT_GENRES_FILE = Path(__file__).resolve().parent.parent / "data" / "genres.yaml"


def load_genres(path: Optional[Union[str, Path]] = None) -> List[str]:
    """Load the genre list from a YAML file.

    The file holds either a plain list or a mapping with a ``genres`` key.
    Blank entries and duplicates are dropped, order is kept.
    """
    path = Path(path) if path else DEFAULT_GENRES_FILE
    try:
        data = FileHandler().read_yaml(path)
    except FileOperationError as e:
        raise ConfigurationError(f"Cannot load genres file: {e}") from e

    if isinstance(data, dict):
        data = data.get("genres")
    if not isinstance(data, list):
        raise ConfigurationError(f"Genres file {path} must contain a list of genres")

    genres: List[str] = []
    for item in data:
        name = str(item).strip() if item is not None else ""
        if name and name not in genres:
            genres.append(name)

    logger.debug(f"Loaded {len(genres)} genres from {path}")
    return genres
