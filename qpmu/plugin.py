"""Plugins: separate programs the launcher starts and queries."""

from __future__ import annotations

import asyncio
import json
import logging
import os
from contextlib import suppress
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomli_w

from qpmu.actions import Action, map_actions
from qpmu.hotkey import Hotkey
from qpmu.input import Input
from qpmu.list_item import ListItem, result_list_from_response
from qpmu.manifest import ManifestError, PluginManifest, parse_manifest
from qpmu.paths import (
    plugin_binary_path,
    plugin_data_directory,
    plugin_database_path,
    plugin_manifest_path,
)
from qpmu.result_list import ResultList

if TYPE_CHECKING:
    from qpmu.config import PluginConfig

log = logging.getLogger(__name__)

_HOST = "localhost"


class PluginLoadError(Exception):
    """Raised when a plugin cannot be found, started or initialised."""


class PluginCallError(Exception):
    """Raised when a running plugin reports an error for a request."""


def sqlite_connection_url(name: str) -> str:
    """Create the database file of plugin ``name`` and return its connection URL."""
    plugin_data_directory(name).mkdir(parents=True, exist_ok=True)
    database = plugin_database_path(name)
    database.touch(exist_ok=True)
    return f"sqlite://{os.fsdecode(database)}"


class _Connection:
    """A started plugin process and the socket used to talk to it."""

    def __init__(
        self,
        process: asyncio.subprocess.Process,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
    ) -> None:
        self._process = process
        self._reader = reader
        self._writer = writer
        self._lock = asyncio.Lock()

    @classmethod
    async def spawn(cls, binary: Path) -> _Connection:
        process = await asyncio.create_subprocess_exec(
            os.fspath(binary), stdout=asyncio.subprocess.PIPE
        )
        try:
            assert process.stdout is not None
            first_line = await process.stdout.readline()
            try:
                port = int(first_line.decode().strip())
            except (UnicodeDecodeError, ValueError) as e:
                raise PluginLoadError(
                    "plugin should print its connected port number to stdout"
                ) from e
            if not 0 < port <= 0xFFFF:
                raise PluginLoadError(f"plugin printed an invalid port {port}")
            try:
                reader, writer = await asyncio.open_connection(_HOST, port)
            except OSError as e:
                raise PluginLoadError(
                    f"failed to connect to plugin server on port {port}: {e}"
                ) from e
        except BaseException:
            with suppress(ProcessLookupError):
                process.kill()
            await process.wait()
            raise
        log.info("finished initialising plugin binary")
        return cls(process, reader, writer)

    async def call(self, method: str, params: dict[str, Any]) -> Any:
        request = json.dumps({"method": method, "params": params}).encode() + b"\n"
        async with self._lock:
            self._writer.write(request)
            await self._writer.drain()
            line = await self._reader.readline()
        if not line:
            raise PluginCallError("plugin closed the connection")
        reply = json.loads(line)
        if reply.get("error") is not None:
            raise PluginCallError(str(reply["error"]))
        return reply.get("result")

    async def close(self) -> None:
        self._writer.close()
        with suppress(OSError):
            await self._writer.wait_closed()
        if self._process.returncode is None:
            with suppress(ProcessLookupError):
                self._process.terminate()
        await self._process.wait()


class Plugin:
    """A configured plugin. Its manifest is read now; the program starts on first use."""

    def __init__(self, config: PluginConfig) -> None:
        self.config = config
        try:
            text = plugin_manifest_path(config.name).read_text(encoding="utf-8")
        except OSError as e:
            raise PluginLoadError(
                f"error opening manifest file of {config.name}: {e}"
            ) from e
        try:
            self.manifest: PluginManifest = parse_manifest(text)
        except ManifestError as e:
            raise PluginLoadError(f"error reading manifest of {config.name}: {e}") from e
        self._connection: _Connection | None = None
        self._initialised = False
        self._start_lock = asyncio.Lock()
        self._init_lock = asyncio.Lock()

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def prefix(self) -> str:
        return self.config.prefix

    def __repr__(self) -> str:
        return f"Plugin({self.name!r})"

    def data_directory_path(self) -> Path:
        return plugin_data_directory(self.name)

    def binary_path(self) -> Path:
        return plugin_binary_path(self.name)

    def manifest_path(self) -> Path:
        return plugin_manifest_path(self.name)

    def database_path(self) -> Path:
        return plugin_database_path(self.name)

    async def start(self) -> None:
        """Start the plugin program if needed and make sure it is initialised."""
        await self._ready()

    async def stop(self) -> None:
        """Disconnect from the plugin and end its process."""
        async with self._start_lock:
            connection, self._connection = self._connection, None
            self._initialised = False
        if connection is not None:
            await connection.close()

    async def _connect(self) -> _Connection:
        async with self._start_lock:
            if self._connection is None:
                log.info("initialising plugin %s", self.name)
                try:
                    self._connection = await _Connection.spawn(self.binary_path())
                except (OSError, PluginLoadError) as e:
                    raise PluginLoadError(
                        f"failed to initialise plugin {self.name}: {e}"
                    ) from e
            return self._connection

    async def _ready(self) -> _Connection:
        connection = await self._connect()
        async with self._init_lock:
            if not self._initialised:
                url = sqlite_connection_url(self.name)
                try:
                    await connection.call(
                        "initialise",
                        {"toml": tomli_w.dumps(self.config.config), "sqlite_url": url},
                    )
                except PluginCallError as e:
                    raise PluginLoadError(
                        f"plugin initialisation function failed: {e}"
                    ) from e
                self._initialised = True
        return connection

    async def query(self, query: str) -> ResultList[ListItem]:
        """Ask the plugin for the results of ``query`` (without the prefix)."""
        connection = await self._ready()
        response = await connection.call("query", {"query": query})
        return result_list_from_response(self, response or {})

    async def _actions(self, method: str, params: dict[str, Any]) -> list[Action]:
        connection = await self._ready()
        response = await connection.call(method, params)
        return map_actions(self.prefix, (response or {}).get("actions", []))

    async def activate(self, selection_id: int) -> list[Action]:
        return await self._actions("activate", {"selection_id": selection_id})

    async def alt_activate(self, selection_id: int) -> list[Action]:
        return await self._actions("alt_activate", {"selection_id": selection_id})

    async def hotkey_activate(self, selection_id: int, hotkey: Hotkey) -> list[Action]:
        return await self._actions(
            "hotkey_activate",
            {"selection_id": selection_id, "hotkey": hotkey.to_dict()},
        )

    async def complete(self, selection_id: int) -> Input | None:
        """Ask for a completion of the item; None if the plugin has none."""
        connection = await self._ready()
        response = await connection.call("complete", {"selection_id": selection_id})
        data = (response or {}).get("input")
        if data is None:
            return None
        return Input.from_plugin_input(
            self.prefix,
            data.get("query", ""),
            data.get("range_lb", 0),
            data.get("range_ub", 0),
        )