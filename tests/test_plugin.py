import sys
import tomllib

import platformdirs
import pytest

from qpmu.config import PluginConfig
from qpmu.hotkey import Hotkey, Key, Modifiers
from qpmu.input import Input
from qpmu.paths import (
    plugin_binary_path,
    plugin_data_directory,
    plugin_database_path,
    plugin_manifest_path,
)
from qpmu.plugin import Plugin, PluginCallError, PluginLoadError, sqlite_connection_url
from qpmu.result_list import ListStyle, ListStyleKind
from qpmu.sdk.messages import Close, Copy, RunShell

SERVER = r'''
import json, socket
srv = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
srv.bind(("127.0.0.1", 0))
srv.listen(1)
print(srv.getsockname()[1], flush=True)
conn, _ = srv.accept()
stream = conn.makefile("rwb")
state = {}
for line in stream:
    request = json.loads(line)
    method, params = request["method"], request["params"]
    if method == "initialise":
        state.update(params)
        reply = {"result": None}
    elif method == "query":
        reply = {"result": {"items": [{"id": 7, "title": params["query"],
                 "description": state.get("toml", ""), "icon": {"text": "T"}}],
                 "list_style": {"grid": None}}}
    elif method == "activate":
        reply = {"result": {"actions": [{"copy": "copied"}, None, {"close": None}]}}
    elif method == "hotkey_activate":
        reply = {"result": {"actions": [{"run_shell": str(params["hotkey"]["key"])}]}}
    elif method == "complete":
        reply = {"result": {"input": {"query": "abc", "range_lb": 1, "range_ub": 2}}}
    else:
        reply = {"error": "no such method " + method}
    stream.write(json.dumps(reply).encode() + b"\n")
    stream.flush()
'''


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    data = tmp_path / "data"
    monkeypatch.setattr(platformdirs, "user_data_dir", lambda *a, **k: str(data))
    return data


def install(name, script=None, manifest=None):
    directory = plugin_data_directory(name)
    directory.mkdir(parents=True, exist_ok=True)
    plugin_manifest_path(name).write_text(
        manifest if manifest is not None else f'name = "{name}"\n'
    )
    if script is not None:
        binary = plugin_binary_path(name)
        binary.write_text(f"#!{sys.executable}\n{script}")
        binary.chmod(0o755)


def test_plugin_reads_manifest(data_dir):
    install("calc", manifest='name = "Calculator"\nauthors = ["someone"]\n')
    plugin = Plugin(PluginConfig("calc", "="))
    assert plugin.name == "calc"
    assert plugin.prefix == "="
    assert plugin.manifest.name == "Calculator"
    assert "calc" in repr(plugin)


def test_missing_manifest(data_dir):
    with pytest.raises(PluginLoadError, match="error opening manifest file of ghost"):
        Plugin(PluginConfig("ghost", ""))


def test_invalid_manifest(data_dir):
    install("bad", manifest="description = 1\n")
    with pytest.raises(PluginLoadError, match="error reading manifest of bad"):
        Plugin(PluginConfig("bad", ""))


def test_path_methods(data_dir):
    install("apps")
    plugin = Plugin(PluginConfig("apps", ""))
    assert plugin.data_directory_path() == plugin_data_directory("apps")
    assert plugin.binary_path() == plugin_binary_path("apps")
    assert plugin.manifest_path() == plugin_manifest_path("apps")
    assert plugin.database_path() == plugin_database_path("apps")


def test_sqlite_connection_url_creates_database(data_dir):
    url = sqlite_connection_url("notes")
    assert plugin_database_path("notes").is_file()
    assert url == f"sqlite://{plugin_database_path('notes')}"


@pytest.mark.asyncio
async def test_query_initialises_and_returns_items(data_dir):
    install("echo", SERVER)
    plugin = Plugin(PluginConfig("echo", "e ", {"depth": 2}))
    try:
        results = await plugin.query("hello")
    finally:
        await plugin.stop()
    assert len(results) == 1
    item = results.selected_item()
    assert item.title == "hello"
    assert item.id == 7
    assert item.plugin is plugin
    assert tomllib.loads(item.description) == {"depth": 2}
    assert results.style == ListStyle(ListStyleKind.GRID)


@pytest.mark.asyncio
async def test_activate_skips_empty_actions(data_dir):
    install("echo", SERVER)
    plugin = Plugin(PluginConfig("echo", ""))
    try:
        actions = await plugin.activate(7)
    finally:
        await plugin.stop()
    assert actions == [Copy("copied"), Close()]


@pytest.mark.asyncio
async def test_hotkey_is_sent(data_dir):
    install("echo", SERVER)
    plugin = Plugin(PluginConfig("echo", ""))
    hotkey = Hotkey(Key.ENTER, Modifiers(ctrl=True))
    try:
        actions = await plugin.hotkey_activate(7, hotkey)
    finally:
        await plugin.stop()
    assert actions == [RunShell(str(int(Key.ENTER)))]


@pytest.mark.asyncio
async def test_complete_adds_prefix(data_dir):
    install("echo", SERVER)
    plugin = Plugin(PluginConfig("echo", "!"))
    try:
        completed = await plugin.complete(7)
    finally:
        await plugin.stop()
    assert completed == Input.from_plugin_input("!", "abc", 1, 2)
    assert completed.contents == "!abc"


@pytest.mark.asyncio
async def test_plugin_error_is_raised(data_dir):
    install("echo", SERVER)
    plugin = Plugin(PluginConfig("echo", ""))
    try:
        with pytest.raises(PluginCallError, match="alt_activate"):
            await plugin.alt_activate(7)
    finally:
        await plugin.stop()


@pytest.mark.asyncio
async def test_bad_port_line(data_dir):
    install("noisy", 'print("hello", flush=True)\n')
    plugin = Plugin(PluginConfig("noisy", ""))
    with pytest.raises(PluginLoadError, match="port number"):
        await plugin.start()


@pytest.mark.asyncio
async def test_missing_binary(data_dir):
    install("nobin")
    plugin = Plugin(PluginConfig("nobin", ""))
    with pytest.raises(PluginLoadError, match="failed to initialise plugin nobin"):
        await plugin.query("x")