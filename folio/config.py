"""Configuration model and loaders for Folio.

Responsibilities:
- Define import runtime configuration as a typed dataclass.
- Provide loader entry points for file- and environment-based configuration.

Key types:
- `FolioConfig`: normalized settings for parsing and import runs.
- `ConfigLoader`: static construction helpers for `FolioConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .parsing import normalize_optional_string, parse_positive_int


_DEFAULT_STORE_PATH = Path("folio-library.json")
_DEFAULT_SUMMARY_MAX_CHARS = 160
_DEFAULT_OVERVIEW_SUMMARY_MAX_CHARS = 220
_DEFAULT_SLUG_RETRY_LIMIT = 10
_DEFAULT_VERSION_RETRY_LIMIT = 10
_DEFAULT_VERSION_NAME = "1"
_DEFAULT_UNTITLED_CHAPTER_TITLE = "Introduction"


@dataclass(slots=True)
class FolioConfig:
    """Runtime configuration for parsing and import commands.

    Attributes:
        store_path: JSON record store location.
        summary_max_chars: Maximum length of per-chapter table-of-contents summaries.
        overview_summary_max_chars: Maximum length of per-version overview summaries.
        slug_retry_limit: Numbered slug variants tried before the time-derived fallback.
        version_retry_limit: Version inserts attempted before giving up on a name.
        default_version_name: Version label used when none is requested.
        untitled_chapter_title: Title for text that precedes any heading.
    """

    store_path: Path = _DEFAULT_STORE_PATH
    summary_max_chars: int = _DEFAULT_SUMMARY_MAX_CHARS
    overview_summary_max_chars: int = _DEFAULT_OVERVIEW_SUMMARY_MAX_CHARS
    slug_retry_limit: int = _DEFAULT_SLUG_RETRY_LIMIT
    version_retry_limit: int = _DEFAULT_VERSION_RETRY_LIMIT
    default_version_name: str = _DEFAULT_VERSION_NAME
    untitled_chapter_title: str = _DEFAULT_UNTITLED_CHAPTER_TITLE

    def validate(self) -> None:
        """Validate configuration values before an import run."""

        if self.summary_max_chars < 2:
            raise ValueError("`summary_max_chars` must be at least 2.")
        if self.overview_summary_max_chars < 2:
            raise ValueError("`overview_summary_max_chars` must be at least 2.")
        if self.slug_retry_limit <= 0:
            raise ValueError("`slug_retry_limit` must be a positive integer.")
        if self.version_retry_limit <= 0:
            raise ValueError("`version_retry_limit` must be a positive integer.")
        self._require_non_empty(self.default_version_name, "default_version_name")
        self._require_non_empty(self.untitled_chapter_title, "untitled_chapter_title")

    @staticmethod
    def _require_non_empty(value: str, field_name: str) -> None:
        """Require a non-empty string field value."""

        if normalize_optional_string(value) is None:
            raise ValueError(f"`{field_name}` must be a non-empty string.")


class ConfigLoader:
    """Factory methods for constructing validated `FolioConfig` instances."""

    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "store_path",
            "summary_max_chars",
            "overview_summary_max_chars",
            "slug_retry_limit",
            "version_retry_limit",
            "default_version_name",
            "untitled_chapter_title",
        }
    )
    _INT_KEYS = (
        "summary_max_chars",
        "overview_summary_max_chars",
        "slug_retry_limit",
        "version_retry_limit",
    )
    _STRING_KEYS = ("default_version_name", "untitled_chapter_title")

    @staticmethod
    def from_yaml(path: Path) -> FolioConfig:
        """Create a validated config from a YAML file."""

        payload = yaml.safe_load(path.read_text(encoding="utf-8"))
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> FolioConfig:
        """Create a validated config from `FOLIO_*` environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env
        payload: dict[str, Any] = {}
        for key in ConfigLoader._SUPPORTED_YAML_KEYS:
            value = normalize_optional_string(env_map.get(f"FOLIO_{key.upper()}"))
            if value is not None:
                payload[key] = value
        return ConfigLoader._build_config_from_mapping(payload, source_label="environment")

    @staticmethod
    def _build_config_from_mapping(payload: Mapping[str, Any], source_label: str) -> FolioConfig:
        """Build a validated config from a normalized mapping payload."""

        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        config = FolioConfig()
        store_path = normalize_optional_string(payload.get("store_path"))
        if store_path is not None:
            config.store_path = Path(store_path)
        for key in ConfigLoader._INT_KEYS:
            if payload.get(key) is not None:
                setattr(config, key, parse_positive_int(payload[key], key))
        for key in ConfigLoader._STRING_KEYS:
            if key in payload:
                value = normalize_optional_string(payload[key])
                if value is None:
                    raise ValueError(f"{source_label} has blank value for `{key}`.")
                setattr(config, key, value)

        config.validate()
        return config
