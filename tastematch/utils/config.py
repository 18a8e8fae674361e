"""Typed application configuration read from YAML.

Sections mirror the collaborators of the engine (embedding service,
catalog, preference store) plus the matching threshold. Values are
validated by pydantic; invalid files surface as ConfigValidationError.

Example:
    >>> config = get_config()
    >>> config.matching.threshold
    0.7
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import ConfigFileNotFoundError, ConfigValidationError
from .logger import get_logger

logger = get_logger(__name__)


CONFIG_ENV_VAR = "TASTEMATCH_CONFIG"
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "config.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

PathLike = Union[str, Path]


class EmbeddingConfig(BaseModel):
    """External embedding service."""

    model: str = Field(default="text-embedding-3-small", description="Embedding model identifier")
    api_key_env: str = Field(default="OPENAI_API_KEY", description="Environment variable holding the API key")
    timeout_seconds: float = Field(default=15.0, gt=0, description="Upper bound for one embedding call")
    cache_enabled: bool = Field(default=False, description="Reuse vectors for identical text")

    @field_validator("model")
    @classmethod
    def model_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Embedding model identifier cannot be empty")
        return v.strip()


class CatalogConfig(BaseModel):
    """Product catalog HTTP API."""

    base_url: str = Field(default="http://localhost:8080/catalog", description="Catalog API base URL")
    api_key_env: Optional[str] = Field(default=None, description="Environment variable holding a bearer token")
    timeout_seconds: float = Field(default=10.0, gt=0, description="Request timeout in seconds")

    @field_validator("base_url")
    @classmethod
    def absolute_http_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")


class DatabaseConfig(BaseModel):
    """ChromaDB preference store."""

    persist_directory: str = Field(default="./data/chroma", description="Persistence directory, or :memory:")
    collection_name: str = Field(default="user_preferences", description="ChromaDB collection name")


class MatchingConfig(BaseModel):
    """Match evaluator defaults."""

    threshold: float = Field(default=0.7, ge=-1.0, le=1.0, description="Minimum cosine similarity for a match")


class AppConfig(BaseModel):
    """Complete TasteMatch configuration."""

    embedding: EmbeddingConfig = Field(default_factory=EmbeddingConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    log_level: str = Field(default="INFO", description="Level name for get_logger")

    @field_validator("log_level")
    @classmethod
    def known_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level


def _resolve_path(config_path: Optional[PathLike]) -> Path:
    if config_path is not None:
        return Path(config_path)
    from_env = os.environ.get(CONFIG_ENV_VAR)
    return Path(from_env) if from_env else DEFAULT_CONFIG_PATH


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        raise ConfigFileNotFoundError(
            f"Configuration file not found: {path}. "
            f"Start from {path.with_name('config.example.yaml')} or set {CONFIG_ENV_VAR}.",
            path=str(path),
        )
    return yaml.safe_load(path.read_text(encoding="utf-8")) or {}


def load_config(config_path: Optional[PathLike] = None) -> AppConfig:
    """Read and validate a configuration file.

    Args:
        config_path: YAML file to read. Defaults to $TASTEMATCH_CONFIG,
                     then config/config.yaml in the project root.

    Returns:
        The validated configuration

    Raises:
        ConfigFileNotFoundError: If the file does not exist
        ConfigValidationError: If a value is invalid (first error reported)
    """
    path = _resolve_path(config_path)
    raw = _read_yaml(path)

    try:
        config = AppConfig.model_validate(raw)
    except ValidationError as e:
        first = e.errors()[0]
        raise ConfigValidationError(
            f"Invalid configuration in {path}: {first['msg']}",
            field=".".join(str(part) for part in first["loc"]),
            value=first.get("input"),
        ) from e

    logger.debug(f"Loaded configuration from {path}")
    return config


_cached: Optional[AppConfig] = None


def get_config(config_path: Optional[PathLike] = None, reload: bool = False) -> AppConfig:
    """Return the process-wide configuration, loading it on first use."""
    global _cached
    if reload or _cached is None:
        _cached = load_config(config_path)
    return _cached


def reset_config() -> None:
    """Forget the cached configuration."""
    global _cached
    _cached = None
