"""Configuration for TaleSpinner."""

import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Optional, Union

from dotenv import load_dotenv

from .exceptions import ConfigurationError, FileOperationError
from .io.file_handler import FileHandler

# Load environment variables
load_dotenv()

DEFAULT_MODEL = "claude-sonnet-4-20250514"


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {value!r}")


_FIELD_TYPES = {
    "api_key": str,
    "model": str,
    "max_tokens": int,
    "max_retries": int,
    "shape_retries": int,
    "temperature": float,
    "output_dir": str,
    "log_file": str,
}


def _coerce(name: str, value: Any, kind: type) -> Any:
    """Convert a setting to its declared type or raise ConfigurationError."""
    if isinstance(value, (bool, list, dict)):
        raise ConfigurationError(f"{name} must be {kind.__name__}, got {value!r}")
    if value is None and kind is str:
        return ""
    try:
        return kind(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be {kind.__name__}, got {value!r}")


@dataclass
class Settings:
    """Central configuration for the application."""

    # API Settings
    api_key: str = field(default_factory=lambda: os.getenv("ANTHROPIC_API_KEY", ""))
    model: str = field(default_factory=lambda: os.getenv("TALESPINNER_MODEL", DEFAULT_MODEL))
    max_tokens: int = field(default_factory=lambda: _env_int("TALESPINNER_MAX_TOKENS", 8000))
    max_retries: int = field(default_factory=lambda: _env_int("TALESPINNER_MAX_RETRIES", 5))
    shape_retries: int = field(default_factory=lambda: _env_int("TALESPINNER_SHAPE_RETRIES", 2))
    temperature: float = field(default_factory=lambda: _env_float("TALESPINNER_TEMPERATURE", 0.7))

    # Files
    output_dir: str = field(default_factory=lambda: os.getenv("TALESPINNER_OUTPUT_DIR", "data"))
    log_file: str = field(default_factory=lambda: os.getenv("TALESPINNER_LOG_FILE", "talespinner.log"))
    genres_file: Optional[str] = field(default_factory=lambda: os.getenv("TALESPINNER_GENRES_FILE") or None)

    def __post_init__(self):
        for name, kind in _FIELD_TYPES.items():
            setattr(self, name, _coerce(name, getattr(self, name), kind))
        if self.genres_file is not None:
            self.genres_file = _coerce("genres_file", self.genres_file, str) or None
        self.validate()

    def validate(self) -> None:
        """Check value ranges."""
        if self.max_tokens <= 0:
            raise ConfigurationError("max_tokens must be positive")
        if self.max_retries < 0:
            raise ConfigurationError("max_retries cannot be negative")
        if self.shape_retries < 0:
            raise ConfigurationError("shape_retries cannot be negative")
        if not 0.0 <= self.temperature <= 1.0:
            raise ConfigurationError("temperature must be between 0 and 1")
        if not self.model:
            raise ConfigurationError("model name cannot be empty")

    def with_overrides(self, **overrides: Any) -> "Settings":
        """Return a copy with every non-None override applied."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ConfigurationError(f"Unknown settings: {', '.join(sorted(unknown))}")
        values = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **values)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "Settings":
        """Load settings from a YAML file on top of the environment defaults."""
        try:
            data = FileHandler().read_yaml(path)
        except FileOperationError as e:
            raise ConfigurationError(f"Cannot load config file: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        return cls().with_overrides(**data)
