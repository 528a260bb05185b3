"""Pydantic settings models for the PDF text extraction pipeline.

Two settings classes load from separate YAML config files with environment
variable override support. Source priority (highest to lowest):

    1. Init arguments (tests and callers overriding per deployment)
    2. Environment variables (with prefix, e.g., EXTRACTION_MIN_WORDS)
    3. .env file
    4. YAML config file (e.g., config/extraction.yaml)
    5. Default values defined here

Config paths are resolved relative to PROJECT_ROOT so the application works
regardless of the current working directory.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

# Resolve project root: settings.py -> config/ -> pdf_prose/ -> src/ -> repo root
PROJECT_ROOT = Path(__file__).resolve().parents[3]

_CONFIG_DIR = PROJECT_ROOT / "config"
_ENV_FILE = PROJECT_ROOT / ".env"


class ExtractionSettings(BaseSettings):
    """Extraction behaviour: input guard, page cap, timeouts, quality gates."""

    # Resource guard
    max_file_size_bytes: int = Field(default=10 * 1024 * 1024, gt=0)  # 10 MiB

    # Structural strategy
    max_pages: int = Field(default=50, gt=0)

    # Per-strategy wall-clock budget; 0 disables the timeout
    strategy_timeout_seconds: float = Field(default=30.0, ge=0)

    # Text quality validator
    min_chars: int = Field(default=20, ge=0)
    min_printable_ratio: float = Field(default=0.70, ge=0, le=1)
    min_words: int = Field(default=5, ge=0)
    min_avg_word_length: float = 2.0
    max_avg_word_length: float = 30.0
    min_alpha_word_length: int = Field(default=3, ge=1)

    # Quality tier: word counts strictly above this are "high"
    high_quality_word_count: int = 100

    model_config = SettingsConfigDict(
        yaml_file=str(_CONFIG_DIR / "extraction.yaml"),
        env_file=str(_ENV_FILE),
        env_prefix="EXTRACTION_",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


class PipelineSettings(BaseSettings):
    """Pipeline operations: logging paths, rotation and console verbosity."""

    log_dir: str = "logs"
    log_file_name: str = "extraction.log"
    log_max_bytes: int = 10_485_760  # 10MB
    log_backup_count: int = 5
    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    model_config = SettingsConfigDict(
        yaml_file=str(_CONFIG_DIR / "pipeline.yaml"),
        env_file=str(_ENV_FILE),
        env_prefix="PIPELINE_",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )
