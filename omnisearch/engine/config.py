"""Configuration management for omnisearch."""

from pathlib import Path
from typing import Optional

import yaml
from loguru import logger
from pydantic import BaseModel, Field, field_validator

from .models import SourceKind

DAY_MS = 24 * 60 * 60 * 1000


class ProviderLimitsConfig(BaseModel):
    """Per-provider caps applied to raw output before global ranking."""
    files: int = 80
    kanban: int = 40
    threads: int = 40
    messages: int = 80
    history: int = 30
    skills: int = 25
    commands: int = 25

    @field_validator('*')
    @classmethod
    def validate_limit(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("provider limits must be positive")
        return v

    def limit_for(self, source_kind: SourceKind) -> int:
        return getattr(self, source_kind.value)


class RankingConfig(BaseModel):
    total_limit: int = 120
    recency_window_ms: int = 7 * DAY_MS
    max_recency_bonus: int = 20

    @field_validator('total_limit', 'recency_window_ms')
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator('max_recency_bonus')
    @classmethod
    def validate_bonus(cls, v: int) -> int:
        if v < 0:
            raise ValueError("max_recency_bonus must not be negative")
        return v


class RecencyConfig(BaseModel):
    max_entries: int = 400
    store_name: str = "app"
    store_key: str = "search.recentOpenMap"

    @field_validator('max_entries')
    @classmethod
    def validate_max_entries(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("max_entries must be positive")
        return v


class PerformanceConfig(BaseModel):
    # Callers debounce keystrokes; the engine itself never rate-limits
    debounce_ms: int = 120
    workspace_count: int = 8
    files_per_workspace: int = 1500
    threads_per_workspace: int = 180
    messages_per_thread: int = 16
    max_elapsed_ms: int = 1600


class StorageConfig(BaseModel):
    data_dir: Path = Field(default_factory=lambda: Path.home() / ".omnisearch")

    @field_validator('data_dir')
    @classmethod
    def validate_data_dir(cls, v: Path) -> Path:
        if isinstance(v, str):
            v = Path(v)
        return v.expanduser()


class SearchConfig(BaseModel):
    """Main configuration for the search engine."""

    limits: ProviderLimitsConfig = Field(default_factory=ProviderLimitsConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    recency: RecencyConfig = Field(default_factory=RecencyConfig)
    performance: PerformanceConfig = Field(default_factory=PerformanceConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "SearchConfig":
        """Load configuration from YAML file."""
        if config_path is None:
            # Try default locations
            candidates = [
                Path("omnisearch.yaml"),
                Path.home() / ".config" / "omnisearch" / "config.yaml",
                Path("/etc/omnisearch/config.yaml"),
            ]
            for candidate in candidates:
                if candidate.exists():
                    config_path = candidate
                    break
            else:
                raise FileNotFoundError(
                    f"No config file found. Searched: {[str(c) for c in candidates]}"
                )

        logger.info(f"Loading config from: {config_path}")
        with open(config_path, 'r') as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    @classmethod
    def load_or_default(cls, config_path: Optional[Path] = None) -> "SearchConfig":
        """Like load(), but fall back to defaults when no file exists."""
        try:
            return cls.load(config_path)
        except FileNotFoundError:
            logger.debug("No config file found, using defaults")
            return cls()

    def save(self, config_path: Path) -> None:
        """Save configuration to YAML file."""
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w') as f:
            yaml.safe_dump(self.model_dump(mode='json'), f, default_flow_style=False)
