"""
Configuration for csv-preview.

Loaded from:
1. Defaults (this file)
2. Config file (~/.config/csv-preview/config.toml, [preview] table) if it exists
3. Environment variables (CSV_PREVIEW_*) override the file
"""

from __future__ import annotations

import codecs
import logging
import os
import tomllib
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass
class PreviewConfig:
    """Settings for detection, parsing and rendering."""

    sniff_lines: int = 5  # leading lines compared by the CSV heuristic
    delimiter: str = ","
    encoding: str = "utf-8"
    title: str = "CSV Preview"
    csv_language_ids: tuple[str, ...] = ("csv", "dynamic-csv")
    csv_extensions: tuple[str, ...] = (".csv",)


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "csv-preview" / "config.toml"
    return Path.home() / ".config" / "csv-preview" / "config.toml"


def _delimiter(value: object) -> str:
    """Validate a field separator; the csv reader needs exactly one character."""
    value = str(value)
    if len(value) != 1:
        raise ValueError(f"delimiter must be a single character, got {value!r}")
    return value


def _encoding(value: object) -> str:
    """Validate a text encoding name against the codec registry."""
    value = str(value)
    try:
        codecs.lookup(value)
    except LookupError as e:
        raise ValueError(f"unknown encoding {value!r}") from e
    return value


def load_config(path: Path | None = None) -> PreviewConfig:
    """Load config from file if it exists, then apply environment overrides."""
    config = PreviewConfig()
    path = path or get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            config = _apply_toml(config, data)
        except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError) as e:
            logger.warning(f"Ignoring unreadable config {path}: {e}")
            config = PreviewConfig()

    return _apply_env(config)


def _apply_toml(config: PreviewConfig, data: dict) -> PreviewConfig:
    """Apply the [preview] table of a toml document to config."""
    p = data.get("preview", {})
    if "sniff_lines" in p:
        config.sniff_lines = int(p["sniff_lines"])
    if "delimiter" in p:
        config.delimiter = _delimiter(p["delimiter"])
    if "encoding" in p:
        config.encoding = _encoding(p["encoding"])
    if "title" in p:
        config.title = str(p["title"])
    if "csv_language_ids" in p:
        config.csv_language_ids = tuple(str(v) for v in p["csv_language_ids"])
    if "csv_extensions" in p:
        config.csv_extensions = tuple(str(v).lower() for v in p["csv_extensions"])
    return config


def _apply_env(config: PreviewConfig) -> PreviewConfig:
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, Callable[[str], object]]] = {
        "CSV_PREVIEW_SNIFF_LINES": ("sniff_lines", int),
        "CSV_PREVIEW_DELIMITER": ("delimiter", _delimiter),
        "CSV_PREVIEW_ENCODING": ("encoding", _encoding),
        "CSV_PREVIEW_TITLE": ("title", str),
    }

    for env_key, (attr, conv) in env_map.items():
        val = os.environ.get(env_key)
        if val is not None:
            try:
                setattr(config, attr, conv(val))
            except ValueError as e:
                logger.warning(f"Ignoring {env_key}={val!r}: {e}")

    return config


_config: PreviewConfig | None = None


def get_config() -> PreviewConfig:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config
