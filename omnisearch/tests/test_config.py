"""Tests for configuration loading."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from omnisearch.engine.config import ProviderLimitsConfig, SearchConfig
from omnisearch.engine.models import SourceKind


def test_defaults_match_documented_limits():
    config = SearchConfig()

    assert config.limits.limit_for(SourceKind.FILES) == 80
    assert config.limits.limit_for(SourceKind.KANBAN) == 40
    assert config.limits.limit_for(SourceKind.THREADS) == 40
    assert config.limits.limit_for(SourceKind.MESSAGES) == 80
    assert config.limits.limit_for(SourceKind.HISTORY) == 30
    assert config.limits.limit_for(SourceKind.SKILLS) == 25
    assert config.limits.limit_for(SourceKind.COMMANDS) == 25
    assert config.ranking.total_limit == 120
    assert config.ranking.recency_window_ms == 7 * 24 * 60 * 60 * 1000
    assert config.recency.max_entries == 400
    assert config.performance.debounce_ms == 120


def test_load_from_yaml(tmp_path):
    """Partial YAML overrides only the named fields."""
    path = tmp_path / "omnisearch.yaml"
    path.write_text(yaml.safe_dump({
        "limits": {"files": 10},
        "ranking": {"total_limit": 30},
        "storage": {"data_dir": str(tmp_path / "store")},
    }))

    config = SearchConfig.load(path)

    assert config.limits.files == 10
    assert config.limits.messages == 80
    assert config.ranking.total_limit == 30
    assert config.storage.data_dir == tmp_path / "store"


def test_save_round_trip(tmp_path):
    config = SearchConfig(limits=ProviderLimitsConfig(skills=5))
    path = tmp_path / "nested" / "config.yaml"

    config.save(path)

    assert SearchConfig.load(path).limits.skills == 5


@pytest.mark.parametrize("section,values", [
    ("limits", {"files": 0}),
    ("ranking", {"total_limit": -1}),
    ("ranking", {"max_recency_bonus": -5}),
    ("recency", {"max_entries": 0}),
])
def test_invalid_values_rejected(section, values):
    with pytest.raises(ValidationError):
        SearchConfig(**{section: values})


def test_load_or_default_without_file(tmp_path):
    config = SearchConfig.load_or_default(tmp_path / "missing.yaml")
    assert config.limits.files == 80
    assert config.storage.data_dir == Path.home() / ".omnisearch"
