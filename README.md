# qpmu

qpmu is the core of a keyboard-driven application launcher. Everything the
launcher shows comes from plugins. Plugins are separate programs that receive
the text typed into the launcher and answer with a list of items. When an
item is selected, its plugin returns actions. An action can run a command,
run a shell line, copy text, close the window or replace the input.

The package has two halves:

- `qpmu` is the launcher side. It covers configuration, plugin manifests,
  plugin processes, the result list, and the `Model` that connects them to a
  user interface.
- `qpmu.sdk` is the plugin side. It builds lists of items, attaches async
  callbacks to them, and answers the launcher's requests.

## What this package does not do

- It has no graphical interface and no command to start a launcher. You
  supply the user interface by implementing `qpmu.model.Frontend`.
- The plugin side has no network server. `PluginService` turns requests into
  reply dictionaries, but it does not listen on a port. A plugin program has
  to do three things itself:
  - print its port number as the first line of stdout;
  - accept a TCP connection on `localhost`;
  - answer newline-separated JSON requests of the form
    `{"method": ..., "params": ...}` with `{"result": ...}` or
    `{"error": ...}`. The launcher sends exactly this format from
    `qpmu.plugin.Plugin`.
- There is no installer for plugins. There is also no ranking of results by
  fuzzy match or by usage history. The plugin database records activation
  counts and last-use times (`qpmu.sdk.sql.fetch_activations`), but nothing
  in the package ranks items with them.

## Installation

Install the package with pip. It needs Python 3.11 or later. Its dependencies
are `tomli-w`, `platformdirs` and `aiosqlite`.

## Configuration

The launcher configuration is a TOML file. By default it lives at
`qpmu.paths.config_path()`, which is `config.toml` inside the user's
configuration directory. Each plugin entry has:

- a name;
- the prefix that routes input to the plugin;
- an optional table of the plugin's own settings.

```toml
[[plugins]]
name = "calc"
prefix = "="

[plugins.config]
precision = 10

[[plugins]]
name = "apps"
prefix = ""
```

```python
from qpmu.config import Config

config = Config.from_file()      # creates an empty file if there is none
plugins = config.load()          # plugins that fail to load are logged and skipped
config.reorder_plugins(plugins)  # entries follow the plugins' order, settings kept
config.write()
```

- `Config.from_toml` and `Config.to_toml` work on strings.
- A malformed configuration raises `ValueError`.
- Input goes to the first plugin whose prefix it starts with. Plugins with an
  empty prefix therefore belong at the end of the list.
- `qpmu.reorder.move_item(items, index, delta)` returns a reordered copy of a
  list and the entry's new index. The new position is clamped to the ends of
  the list.

## Plugin layout

Each plugin has its own directory, `qpmu.paths.plugin_data_directory(name)`,
under the user's data directory. It holds:

- `plugin_binary_path(name)`: the executable that is started. It has the same
  name as the plugin.
- `plugin_manifest_path(name)`: `manifest.toml`. It is read as soon as a
  `qpmu.plugin.Plugin` is created.
- `plugin_database_path(name)`: `data.db`. It is created by
  `qpmu.plugin.sqlite_connection_url`, and the plugin receives it as a
  `sqlite://` URL.

A manifest names the plugin and describes the settings it accepts:

```toml
name = "Open"
description = "Open URLs with a query"
authors = ["someone"]

[schema.urls]
title = "List of URLs to show"

[schema.urls.type]
type-name = "map"
value-type.type-name = "struct"
value-type.fields = { name = "str", url = "str" }
```

```python
from qpmu.manifest import parse_manifest

manifest = parse_manifest(text)
print(manifest.name, sorted(manifest.schema))
```

A setting type is written in one of two forms:

- As a bare name: `int`, `str`, `bool`, `file-path` or `folder-path`. This
  gives that type with default limits.
- As a table with a `type-name` key. The table form also allows `list`
  (needs `item-type`), `map` (needs `value-type`) and `struct` (needs
  `fields`).

A malformed manifest raises `qpmu.manifest.ManifestError`. A plugin whose
manifest is missing or invalid raises `qpmu.plugin.PluginLoadError`.

## Plugin processes

A `qpmu.plugin.Plugin` starts its executable on first use, or when `start()`
is awaited. It reads the port the executable prints and connects to it. It
then sends one `initialise` request carrying two things:

- the plugin's settings as TOML;
- the database URL.

After that it sends `query`, `activate`, `alt_activate`, `hotkey_activate`
and `complete` requests. `stop()` closes the connection and ends the process.

Inputs returned by a plugin get the plugin's prefix put back in front, and
their selection is shifted to match.

## Driving a user interface

A user interface subclasses `qpmu.model.Frontend` and implements:

- `close`
- `copy`
- `set_input`
- `set_list`
- `set_list_selection`
- `display_error`

It passes user events to a `qpmu.model.Model`. The model's methods schedule
plugin work on the running asyncio event loop, so call them from inside it.

| Method | What it does |
| --- | --- |
| `set_input(input)` | Stores a `qpmu.input.Input` (text plus a character selection) and queries the matching plugin. |
| `set_list_selection(index)`, `move_list_selection(delta)` | Move the selection. |
| `activate()`, `alt_activate()`, `hotkey_activate(hotkey)`, `complete()` | Call the selected item's plugin and carry out the actions it returns. |
| `reload(config)` | Loads the plugins of a new `Config`. |
| `await wait_idle()` | Waits until all scheduled work, including follow-ups, has finished. |

Actions are carried out as follows:

- `RunCommand` starts a program with `qpmu.spawn.free_null`, with all of its
  standard streams sent to the null device.
- `RunShell` runs its line through `sh -c`.
- Failures are reported to `Frontend.display_error`.

The list and selection behave as follows:

- Results that arrive for an input older than the one already shown are
  dropped.
- In a `qpmu.result_list.ResultList`, moving the selection wraps around only
  when the selection is already at the first or last item. From anywhere
  else it stops at the end first.

Hotkeys are a `qpmu.hotkey.Key` together with `Modifiers`:

- `key_from_name("Return")` maps a toolkit key name to a `Key`.
- `hotkey_from_key_event` builds a `Hotkey` only when ctrl, alt or super is
  held and the key is recognised. Otherwise it returns `None`.

## Writing a plugin

A plugin subclasses `qpmu.sdk.service.Plugin`. It builds itself from its TOML
settings in `create` and answers queries with a `qpmu.sdk.items.List`:

```python
from qpmu.sdk.items import List, ListItem
from qpmu.sdk.messages import Close, Copy
from qpmu.sdk.service import Plugin


class Echo(Plugin):
    @classmethod
    async def create(cls, toml):
        return cls()

    async def query(self, query):
        async def copy():
            return [Copy(query), Close()]

        item = (
            ListItem(query)
            .with_description("Copy to clipboard")
            .with_icon_name("edit-copy")
            .on_activate(copy)
        )
        return List([item]).as_rows()
```

`ListItem` builder methods return changed copies. Its callbacks are async:

- `on_activate`, `on_alt_activate` and `on_hotkey_activate` return lists of
  actions from `qpmu.sdk.messages`: `Close`, `RunCommand`, `RunShell`, `Copy`
  or `SetInput`.
- `on_complete` returns a `PluginInput` or `None`.

Before an activation callback runs, the activation is counted by title in the
plugin's database (`qpmu.sdk.sql`).

`PluginService(Echo)` handles the launcher's requests:

- `initialise` opens the database and creates the plugin.
- `query` stores the callbacks of each listed item in a
  `qpmu.sdk.store.ListItemStore` under a fresh id.
- `activate`, `alt_activate`, `hotkey_activate` and `complete` look the
  callbacks up by that id.

Failures raise `PluginError`. Its `code` attribute is `"data_loss"` when an
id is no longer known, and `"unknown"` otherwise.

## Running the tests

Install the `test` extra and run `pytest` from the project directory.