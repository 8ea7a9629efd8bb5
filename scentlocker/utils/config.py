"""Configuration management system using Pydantic v2 and YAML.

This module provides type-safe configuration loading with validation
for the ScentLocker application.
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from scentlocker.utils.exceptions import ConfigFileNotFoundError, ConfigurationError


class DatasetConfig(BaseModel):
    """Configuration for the fragrance dataset and its scan bounds."""

    path: str = Field(default="./data/perfumes.json", description="JSON dataset location")
    lexical_scan_limit: int = Field(default=5000, ge=1, description="Records scored by lexical search")
    vibe_scan_limit: int = Field(default=2000, ge=1, description="Records handed to the vibe engine")


class SearchConfig(BaseModel):
    """Configuration for lexical and vibe search behaviour."""

    default_limit: int = Field(default=20, ge=1, description="Default lexical result count")
    vibe_limit: int = Field(default=5, ge=1, description="Default vibe result count")
    min_query_length: int = Field(default=2, ge=1, description="Shortest query that is searched")
    exhaustive: bool = Field(default=False, description="Disable bounded-scan early exits")
    debounce_seconds: float = Field(default=0.3, ge=0.0, description="Typing debounce delay")


class VisionConfig(BaseModel):
    """Configuration for the external image-embedding provider."""

    api_url: str = Field(
        default="https://api-inference.huggingface.co/models/sentence-transformers/clip-ViT-B-32",
        description="Inference endpoint returning image embeddings",
    )
    api_token: Optional[str] = Field(default=None, description="Bearer token for the inference API")
    match_threshold: float = Field(default=0.7, ge=0.0, le=1.0, description="Minimum similarity for a match")
    timeout_seconds: int = Field(default=30, ge=1, description="HTTP timeout per request")
    default_retry_after: float = Field(default=10.0, ge=0.0, description="Wait used when 503 has no hint")
    max_concurrency: int = Field(default=8, ge=1, description="Parallel embedding requests")
    candidate_limit: Optional[int] = Field(
        default=None, ge=1, description="Compare only the first N catalog images (None = all)"
    )

    @field_validator('api_url')
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Ensure the endpoint is an http(s) URL."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("api_url must start with http:// or https://")
        return v


class LockerConfig(BaseModel):
    """Configuration for the personal collection store."""

    storage_path: str = Field(
        default="./data/perfume-locker-collection.json", description="Locker JSON file"
    )


class AppConfig(BaseModel):
    """Root configuration model containing all sub-configurations."""

    dataset: DatasetConfig = Field(default_factory=DatasetConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    vision: VisionConfig = Field(default_factory=VisionConfig)
    locker: LockerConfig = Field(default_factory=LockerConfig)
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid log level. Choose from: {valid_levels}")
        return v_upper

    @model_validator(mode='after')
    def validate_scan_limits(self) -> 'AppConfig':
        """The vibe pre-filter window cannot exceed the lexical one."""
        if self.dataset.vibe_scan_limit > self.dataset.lexical_scan_limit:
            raise ValueError(
                "dataset.vibe_scan_limit must not exceed dataset.lexical_scan_limit"
            )
        return self


_config: Optional[AppConfig] = None


def load_config(config_path: Optional[Path | str] = None) -> AppConfig:
    """Load and validate configuration from YAML file.

    Args:
        config_path: Path to configuration file. Defaults to config/config.yaml
                    relative to project root, or SCENTLOCKER_CONFIG env var

    Returns:
        Validated AppConfig instance

    Raises:
        ConfigFileNotFoundError: If config file doesn't exist
        ConfigurationError: If the YAML is malformed or fails validation
    """
    if config_path is None:
        env_config_path = os.environ.get('SCENTLOCKER_CONFIG')
        if env_config_path:
            config_path = Path(env_config_path)
        else:
            project_root = Path(__file__).parent.parent.parent
            config_path = project_root / "config" / "config.yaml"
    else:
        config_path = Path(config_path)

    if not config_path.exists():
        example_path = config_path.parent / "config.example.yaml"
        raise ConfigFileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Please copy {example_path} to {config_path} and customize it.\n"
            f"Alternatively, set the SCENTLOCKER_CONFIG environment variable to the config file path.",
            path=str(config_path),
        )

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config_dict = yaml.safe_load(f) or {}
        return AppConfig.model_validate(config_dict)
    except (yaml.YAMLError, ValidationError) as e:
        raise ConfigurationError(
            f"Invalid configuration in {config_path}: {e}",
            context={"path": str(config_path)},
        ) from e


def get_config(config_path: Optional[Path | str] = None, reload: bool = False) -> AppConfig:
    """Get configuration instance (singleton pattern).

    Args:
        config_path: Path to configuration file (only used on first call or if reload=True)
        reload: Force reload of configuration

    Returns:
        Cached or newly loaded AppConfig instance
    """
    global _config

    if _config is None or reload:
        _config = load_config(config_path)

    return _config


def reset_config() -> None:
    """Reset cached configuration (useful for testing)."""
    global _config
    _config = None
