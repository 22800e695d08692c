"""Where the launcher keeps its configuration and plugin data."""

from __future__ import annotations

from pathlib import Path

import platformdirs

APP_NAME = "qpmu"


def config_dir() -> Path:
    """The launcher's configuration directory."""
    return Path(platformdirs.user_config_dir()) / APP_NAME


def config_path() -> Path:
    """The launcher's configuration file."""
    return config_dir() / "config.toml"


def data_dir() -> Path:
    """The launcher's data directory."""
    return Path(platformdirs.user_data_dir()) / APP_NAME


def plugin_data_directory(name: str) -> Path:
    """The directory holding everything that belongs to plugin ``name``."""
    return data_dir() / "plugins" / name


def plugin_binary_path(name: str) -> Path:
    """The executable of plugin ``name``."""
    return plugin_data_directory(name) / name


def plugin_manifest_path(name: str) -> Path:
    """The manifest file of plugin ``name``."""
    return plugin_data_directory(name) / "manifest.toml"


def plugin_database_path(name: str) -> Path:
    """The sqlite database of plugin ``name``."""
    return plugin_data_directory(name) / "data.db"