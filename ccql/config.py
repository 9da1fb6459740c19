# ccql/config.py
"""
Central configuration for ccql.
Uses dataclasses for type-safe configuration management.
"""
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Optional
import json
import os


# Default similarity threshold for near-duplicate prompts (80%)
DEFAULT_SIMILARITY_THRESHOLD = 0.8


class ConfigError(ValueError):
    """Raised for invalid configuration files or values."""


class EditMetric(str, Enum):
    """Edit distance used for normalized similarity."""
    OSA = "osa"                  # insert/delete/substitute + adjacent transposition
    LEVENSHTEIN = "levenshtein"  # insert/delete/substitute only


class AssignmentStrategy(str, Enum):
    """How a prompt picks among the clusters it is similar to."""
    FIRST_MATCH = "first_match"
    BEST_MATCH = "best_match"


class SortOrder(str, Enum):
    """Report ordering."""
    COUNT = "count"
    LATEST = "latest"


@dataclass
class DedupConfig:
    """Configuration for the fuzzy deduplication engine."""
    similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD
    metric: EditMetric = EditMetric.OSA
    strategy: AssignmentStrategy = AssignmentStrategy.FIRST_MATCH

    def __post_init__(self):
        self.metric = EditMetric(self.metric)
        self.strategy = AssignmentStrategy(self.strategy)
        validate_threshold(self.similarity_threshold)


@dataclass
class ReportConfig:
    """Caller-side filters applied to the cluster list."""
    min_count: int = 2
    limit: int = 50
    min_length: int = 4
    sort: SortOrder = SortOrder.COUNT
    show_variants: bool = False

    def __post_init__(self):
        self.sort = SortOrder(self.sort)
        if self.min_count < 0:
            raise ConfigError(f"min_count must be >= 0, got {self.min_count}")
        if self.limit < 0:
            raise ConfigError(f"limit must be >= 0, got {self.limit}")
        if self.min_length < 0:
            raise ConfigError(f"min_length must be >= 0, got {self.min_length}")


@dataclass
class IngestionConfig:
    """Configuration for reading prompt history."""
    history_file: str = "history.jsonl"
    text_field: str = "display"
    encoding: str = "utf-8"


@dataclass
class AppConfig:
    """Main application configuration container."""
    dedup: DedupConfig = field(default_factory=DedupConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    ingestion: IngestionConfig = field(default_factory=IngestionConfig)

    app_title: str = "ccql"
    app_version: str = "0.1.0"


def validate_threshold(threshold: float) -> float:
    """
    Check that a similarity threshold lies in [0.0, 1.0].

    Raises:
        ConfigError: If the value is not a number in range
    """
    if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
        raise ConfigError(f"Similarity threshold must be a number, got {threshold!r}")
    if not 0.0 <= threshold <= 1.0:
        raise ConfigError(f"Similarity threshold must be between 0.0 and 1.0, got {threshold}")
    return float(threshold)


_SECTIONS = {
    'dedup': DedupConfig,
    'report': ReportConfig,
    'ingestion': IngestionConfig,
}


def _build_section(name: str, values: Any):
    section_cls = _SECTIONS[name]
    if not isinstance(values, dict):
        raise ConfigError(f"Section '{name}' must be an object")

    known = {f.name for f in fields(section_cls)}
    unknown = set(values) - known
    if unknown:
        raise ConfigError(f"Unknown field(s) in section '{name}': {', '.join(sorted(unknown))}")

    try:
        return section_cls(**values)
    except ConfigError:
        raise
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value in section '{name}': {e}") from e


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load configuration from file or return defaults.

    The file is a JSON object whose keys are section names
    ('dedup', 'report', 'ingestion'); omitted sections and fields
    keep their defaults.

    Args:
        config_path: Optional path to JSON config file

    Returns:
        AppConfig instance with loaded or default values

    Raises:
        ConfigError: If the file cannot be read or contains invalid values
    """
    if config_path is None:
        return AppConfig()

    if not os.path.isfile(config_path):
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Config file is not valid JSON: {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a JSON object")

    unknown = set(data) - set(_SECTIONS)
    if unknown:
        raise ConfigError(f"Unknown config section(s): {', '.join(sorted(unknown))}")

    sections = {name: _build_section(name, values) for name, values in data.items()}
    return AppConfig(**sections)
