"""The launcher's configuration file: which plugins to load and how."""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol

import tomli_w

from qpmu.paths import config_path
from qpmu.plugin import Plugin, PluginLoadError

log = logging.getLogger(__name__)


class _NamedPlugin(Protocol):
    @property
    def name(self) -> str: ...

    @property
    def prefix(self) -> str: ...


@dataclass
class PluginConfig:
    """One plugin entry: its name, input prefix and its own settings table."""

    name: str
    prefix: str
    config: dict[str, Any] = field(default_factory=dict)


def _plugin_config(entry: Any) -> PluginConfig:
    if not isinstance(entry, dict):
        raise ValueError("each entry of `plugins` must be a table")
    for key in ("name", "prefix"):
        if key not in entry:
            raise ValueError(f"plugin entry is missing field `{key}`")
        if not isinstance(entry[key], str):
            raise ValueError(f"plugin field `{key}` must be a string")
    settings = entry.get("config", {})
    if not isinstance(settings, dict):
        raise ValueError("plugin field `config` must be a table")
    return PluginConfig(entry["name"], entry["prefix"], settings)


@dataclass
class Config:
    """The whole launcher configuration."""

    plugins: list[PluginConfig] = field(default_factory=list)

    @classmethod
    def from_toml(cls, text: str) -> Config:
        """Parse configuration TOML; a missing ``plugins`` array means none."""
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"invalid configuration: {e}") from e
        plugins = data.get("plugins", [])
        if not isinstance(plugins, list):
            raise ValueError("`plugins` must be an array of tables")
        return cls([_plugin_config(entry) for entry in plugins])

    @classmethod
    def from_file(cls, path: str | os.PathLike[str] | None = None) -> Config:
        """Read the configuration file, creating it empty if it does not exist."""
        target = Path(path) if path is not None else config_path()
        log.info("loading config from %s", target)
        with open(target, "a+", encoding="utf-8") as file:
            file.seek(0)
            text = file.read()
        log.debug("read config %r", text)
        return cls.from_toml(text)

    def to_toml(self) -> str:
        return tomli_w.dumps(
            {
                "plugins": [
                    {"name": p.name, "prefix": p.prefix, "config": p.config}
                    for p in self.plugins
                ]
            }
        )

    def write(self, path: str | os.PathLike[str] | None = None) -> None:
        """Write the configuration back to its file."""
        target = Path(path) if path is not None else config_path()
        target.write_text(self.to_toml(), encoding="utf-8")

    def load(self) -> list[Plugin]:
        """Create the configured plugins, logging and skipping any that fail."""
        log.info("loading plugins from config")
        plugins: list[Plugin] = []
        for plugin_config in self.plugins:
            try:
                plugin = Plugin(plugin_config)
            except PluginLoadError as e:
                log.error("error finding plugin: %s", e)
                continue
            log.debug("found plugin %r", plugin)
            plugins.append(plugin)
        log.info("found plugins %r", plugins)
        return plugins

    def reorder_plugins(self, new_order: Iterable[_NamedPlugin]) -> None:
        """Order the plugin entries like ``new_order``, keeping existing settings.

        Plugins without an entry get a fresh one; entries for plugins not in
        ``new_order`` are dropped.
        """
        remaining = list(self.plugins)
        reordered: list[PluginConfig] = []
        for plugin in new_order:
            index = next(
                (i for i, existing in enumerate(remaining) if existing.name == plugin.name),
                None,
            )
            if index is None:
                reordered.append(PluginConfig(plugin.name, plugin.prefix))
            else:
                reordered.append(remaining.pop(index))
        self.plugins = reordered