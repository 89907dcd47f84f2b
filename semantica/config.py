"""Configuration management with Pydantic and XDG base directory support."""

import logging
import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field, PrivateAttr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_INDEX_FILENAME = "index.smv"


def get_xdg_data_home() -> Path:
    """Get XDG_DATA_HOME directory, defaulting to ~/.local/share."""
    xdg_data = os.getenv("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data)
    return Path.home() / ".local" / "share"


EmbeddingBackend = Literal["sentence-transformers", "hash"]
ValueCodecName = Literal["int", "str", "json"]


class Settings(BaseSettings):
    """Semantica configuration settings.

    Precedence: CLI flag > environment variable > .env file > defaults.
    """

    model_config = SettingsConfigDict(
        env_prefix="SEMANTICA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    online: bool = Field(
        default=False,
        description="Allow downloading embedding model weights",
    )

    data_dir: Path | None = Field(
        default=None,
        description="Override data directory (defaults to XDG_DATA_HOME/semantica)",
    )

    index_path: Path | None = Field(
        default=None,
        description="Persisted index file (defaults to <data_dir>/index.smv)",
    )

    # Index settings
    dimension: int = Field(
        default=384,
        ge=1,
        description="Embedding dimension shared by every entry",
    )

    tolerance: float = Field(
        default=0.1,
        ge=0.0,
        description="Expanding scan stops once a ring falls this far below the best score",
    )

    embedding_minimum: float = Field(
        default=0.5,
        description="Lowest similarity accepted as a match",
    )

    value_codec: ValueCodecName = Field(
        default="int",
        description="Codec used for stored values: int, str or json",
    )

    # Embedding settings
    embedding_backend: EmbeddingBackend = Field(
        default="sentence-transformers",
        description="Embedding provider: sentence-transformers or hash (offline, deterministic)",
    )

    embedding_model: str = Field(
        default="sentence-transformers/all-MiniLM-L6-v2",
        description="sentence-transformers model name or local path",
    )

    embedding_device: str | None = Field(
        default=None,
        description="Torch device for the embedding model (cpu, cuda, mps)",
    )

    log_level: str = Field(
        default="WARNING",
        description="Root log level for the CLI",
    )

    _resolved_data_dir: Path | None = PrivateAttr(default=None)
    _data_dir_warning_emitted: bool = PrivateAttr(default=False)

    @field_validator("log_level")
    @classmethod
    def normalise_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    def get_data_dir(self) -> Path:
        """Get the data directory, creating if necessary."""
        if self._resolved_data_dir is not None:
            return self._resolved_data_dir

        if self.data_dir:
            data_dir = self.data_dir
            data_dir.mkdir(parents=True, exist_ok=True)
            self._resolved_data_dir = data_dir
            return data_dir

        primary_dir = get_xdg_data_home() / "semantica"
        try:
            primary_dir.mkdir(parents=True, exist_ok=True)
            self._resolved_data_dir = primary_dir
            return primary_dir
        except PermissionError as exc:
            fallback = Path.cwd() / ".semantica-data"
            fallback.mkdir(parents=True, exist_ok=True)
            self._resolved_data_dir = fallback
            if not self._data_dir_warning_emitted:
                print(
                    f"Warning: cannot create data directory at {primary_dir} ({exc}). "
                    f"Using local '{fallback}' instead. Pass --filepath to override.",
                    file=sys.stderr,
                )
                self._data_dir_warning_emitted = True
            return fallback

    def get_index_path(self) -> Path:
        """Get path to the persisted index file."""
        if self.index_path is not None:
            return self.index_path
        return self.get_data_dir() / DEFAULT_INDEX_FILENAME


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance (useful for testing)."""
    global _settings
    _settings = settings
