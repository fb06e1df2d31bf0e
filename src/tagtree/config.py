"""
Configuration for tagtree.

All tunable labels in one place. Loaded from:
1. Defaults (this file)
2. Config file (~/.config/tagtree/config.toml) if exists
3. Environment variables (TAGTREE_*) override file
4. CLI flags override everything
"""

from __future__ import annotations

import logging
import os
import tomllib  # stdlib in 3.11+
from dataclasses import dataclass, field
from pathlib import Path

from .dom import LIST_LABELS, ROOT_LABEL, STRUCTURAL_LABELS


@dataclass
class LabelsConfig:
    """Tag vocabularies that steer the builder, remover and word wrapper."""
    root: str = ROOT_LABEL
    structural: frozenset[str] = STRUCTURAL_LABELS
    list_containers: frozenset[str] = LIST_LABELS
    list_item: str = "li"
    promoted_item: str = "p"  # li under a removed list container becomes this


@dataclass
class TableConfig:
    """Labels used by bold_row."""
    row: str = "tr"
    cell: str = "td"
    bold: str = "b"


@dataclass
class IOConfig:
    encoding: str = "utf-8"


@dataclass
class LoggingConfig:
    level: str = "WARNING"


@dataclass
class Config:
    """Root config with all settings."""
    labels: LabelsConfig = field(default_factory=LabelsConfig)
    table: TableConfig = field(default_factory=TableConfig)
    io: IOConfig = field(default_factory=IOConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def get_config_path() -> Path:
    """Get config file path, respecting XDG."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "tagtree" / "config.toml"
    return Path.home() / ".config" / "tagtree" / "config.toml"


def load_config() -> Config:
    """Load config from file if exists, else return defaults."""
    config = Config()
    path = get_config_path()

    if path.exists():
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
            config = _apply_toml(config, data)
        except (OSError, tomllib.TOMLDecodeError, TypeError, ValueError):
            config = Config()  # fall back to defaults on a broken file

    # env var overrides
    config = _apply_env(config)

    return config


def _is_log_level(name: str) -> bool:
    """True for a level name logging knows (DEBUG, INFO, ...)."""
    return isinstance(logging.getLevelName(name), int)


def _apply_toml(config: Config, data: dict) -> Config:
    """Apply toml data to config."""
    if "labels" in data:
        lb = data["labels"]
        if "root" in lb:
            config.labels.root = str(lb["root"])
        if "structural" in lb:
            config.labels.structural = frozenset(str(x) for x in lb["structural"])
        if "list_containers" in lb:
            config.labels.list_containers = frozenset(str(x) for x in lb["list_containers"])
        if "list_item" in lb:
            config.labels.list_item = str(lb["list_item"])
        if "promoted_item" in lb:
            config.labels.promoted_item = str(lb["promoted_item"])

    if "table" in data:
        t = data["table"]
        if "row" in t:
            config.table.row = str(t["row"])
        if "cell" in t:
            config.table.cell = str(t["cell"])
        if "bold" in t:
            config.table.bold = str(t["bold"])

    if "io" in data and "encoding" in data["io"]:
        config.io.encoding = str(data["io"]["encoding"])

    if "logging" in data and "level" in data["logging"]:
        level = str(data["logging"]["level"]).upper()
        if _is_log_level(level):
            config.logging.level = level

    return config


def _apply_env(config: Config) -> Config:
    """Apply environment variable overrides."""
    env_map: dict[str, tuple[str, str]] = {
        "TAGTREE_ROOT_LABEL": ("labels", "root"),
        "TAGTREE_LIST_ITEM": ("labels", "list_item"),
        "TAGTREE_PROMOTED_ITEM": ("labels", "promoted_item"),
        "TAGTREE_ROW_LABEL": ("table", "row"),
        "TAGTREE_CELL_LABEL": ("table", "cell"),
        "TAGTREE_BOLD_LABEL": ("table", "bold"),
        "TAGTREE_ENCODING": ("io", "encoding"),
        "TAGTREE_LOG_LEVEL": ("logging", "level"),
    }

    for env_key, (section, attr) in env_map.items():
        val = os.environ.get(env_key)
        if val:
            if attr == "level":
                val = val.upper()
                if not _is_log_level(val):
                    continue
            setattr(getattr(config, section), attr, val)

    return config


# Module-level config instance, loaded once on first use
_config: Config | None = None


def get_config() -> Config:
    """Get the global config instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() reloads it."""
    global _config
    _config = None
