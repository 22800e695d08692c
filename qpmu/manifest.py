"""Plugin manifests: metadata and the schema of a plugin's configuration."""

from __future__ import annotations

import tomllib
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar, Union

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1
U64_MAX = 2**64 - 1

T = TypeVar("T")


class ManifestError(ValueError):
    """Raised when a manifest or a configuration schema is invalid."""


@dataclass
class ConfigInt:
    min: int = I64_MIN
    max: int = I64_MAX
    default: int | None = None


@dataclass
class ConfigStr:
    min_length: int = 0
    max_length: int = U64_MAX
    default: str | None = None


@dataclass
class ConfigBool:
    default: bool | None = None


@dataclass
class ConfigFilePath:
    extension: list[str] | None = None
    default: str | None = None


@dataclass
class ConfigFolderPath:
    default: str | None = None


@dataclass
class ConfigList:
    item_type: ConfigType
    min_items: int = 0
    unique: bool = False
    """Whether all items in the list must be unique."""


@dataclass
class ConfigMap:
    """A map from any string to values of one type."""

    value_type: ConfigType
    min_items: int = 0


@dataclass
class ConfigStruct:
    """A map with specific keys, each with its own type."""

    fields: dict[str, ConfigType]


@dataclass
class ConfigSelection:
    """A choice of one of several strings."""

    allowed_values: list[str]
    default: str | None = None


ConfigType = Union[
    ConfigInt,
    ConfigStr,
    ConfigBool,
    ConfigFilePath,
    ConfigFolderPath,
    ConfigList,
    ConfigMap,
    ConfigStruct,
]


@dataclass
class ConfigSchema:
    title: str
    config_type: ConfigType
    description: str | None = None


@dataclass
class PluginManifest:
    """The manifest of one plugin, read from its ``manifest.toml``."""

    name: str
    description: str | None = None
    repository: str | None = None
    authors: list[str] = field(default_factory=list)
    schema: dict[str, ConfigSchema] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> PluginManifest:
        table = _table(data, "manifest")
        schema_table = _get(table, "schema", _table, {})
        return cls(
            name=_require(table, "name", _string),
            description=_get(table, "description", _string, None),
            repository=_get(table, "repository", _string, None),
            authors=_get(table, "authors", _string_list, []),
            schema={
                key: _wrap(key, parse_config_schema, value)
                for key, value in schema_table.items()
            },
        )


# value checks #


def _table(value: Any, name: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ManifestError(f"`{name}`: expected a table, found {type(value).__name__}")
    return value


def _string(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise ManifestError(f"`{name}`: expected a string, found {type(value).__name__}")
    return value


def _bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise ManifestError(f"`{name}`: expected a boolean, found {type(value).__name__}")
    return value


def _int_in(low: int, high: int) -> Callable[[Any, str], int]:
    def check(value: Any, name: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ManifestError(
                f"`{name}`: expected an integer, found {type(value).__name__}"
            )
        if not low <= value <= high:
            raise ManifestError(f"`{name}`: {value} is out of range")
        return value

    return check


_i64 = _int_in(I64_MIN, I64_MAX)
_u64 = _int_in(0, U64_MAX)


def _string_list(value: Any, name: str) -> list[str]:
    if not isinstance(value, list):
        raise ManifestError(f"`{name}`: expected an array, found {type(value).__name__}")
    return [_string(item, name) for item in value]


def _config_type(value: Any, name: str) -> ConfigType:
    return _wrap(name, parse_config_type, value)


def _config_type_table(value: Any, name: str) -> dict[str, ConfigType]:
    return {
        key: _wrap(key, parse_config_type, item)
        for key, item in _table(value, name).items()
    }


def _wrap(name: str, parse: Callable[[Any], T], value: Any) -> T:
    try:
        return parse(value)
    except ManifestError as e:
        raise ManifestError(f"in `{name}`: {e}") from e


def _get(table: dict[str, Any], key: str, parse: Callable[[Any, str], T], default: T) -> T:
    if key not in table:
        return default
    return parse(table[key], key)


def _require(table: dict[str, Any], key: str, parse: Callable[[Any, str], T]) -> T:
    if key not in table:
        raise ManifestError(f"missing field `{key}`")
    return parse(table[key], key)


# config types #


def _parse_int(t: dict[str, Any]) -> ConfigInt:
    return ConfigInt(
        min=_get(t, "min", _i64, I64_MIN),
        max=_get(t, "max", _i64, I64_MAX),
        default=_get(t, "default", _i64, None),
    )


def _parse_str(t: dict[str, Any]) -> ConfigStr:
    return ConfigStr(
        min_length=_get(t, "min-length", _u64, 0),
        max_length=_get(t, "max-length", _u64, U64_MAX),
        default=_get(t, "default", _string, None),
    )


def _parse_bool(t: dict[str, Any]) -> ConfigBool:
    return ConfigBool(default=_get(t, "default", _bool, None))


def _parse_file_path(t: dict[str, Any]) -> ConfigFilePath:
    return ConfigFilePath(
        extension=_get(t, "extension", _string_list, None),
        default=_get(t, "default", _string, None),
    )


def _parse_folder_path(t: dict[str, Any]) -> ConfigFolderPath:
    return ConfigFolderPath(default=_get(t, "default", _string, None))


def _parse_list(t: dict[str, Any]) -> ConfigList:
    return ConfigList(
        item_type=_require(t, "item-type", _config_type),
        min_items=_get(t, "min-items", _u64, 0),
        unique=_get(t, "unique", _bool, False),
    )


def _parse_map(t: dict[str, Any]) -> ConfigMap:
    return ConfigMap(
        value_type=_require(t, "value-type", _config_type),
        min_items=_get(t, "min-items", _u64, 0),
    )


def _parse_struct(t: dict[str, Any]) -> ConfigStruct:
    return ConfigStruct(fields=_require(t, "fields", _config_type_table))


_TABLE_PARSERS: dict[str, Callable[[dict[str, Any]], ConfigType]] = {
    "int": _parse_int,
    "str": _parse_str,
    "bool": _parse_bool,
    "file-path": _parse_file_path,
    "folder-path": _parse_folder_path,
    "list": _parse_list,
    "map": _parse_map,
    "struct": _parse_struct,
}

_STRING_FORMS: dict[str, Callable[[], ConfigType]] = {
    "int": ConfigInt,
    "str": ConfigStr,
    "bool": ConfigBool,
    "file-path": ConfigFilePath,
    "folder-path": ConfigFolderPath,
}


def parse_config_type(data: Any) -> ConfigType:
    """Parse a config type given either as a name or as a table with ``type-name``.

    The short name form is only available for types without required fields.
    """
    if isinstance(data, str):
        make = _STRING_FORMS.get(data)
        if make is None:
            expected = ", ".join(f"`{name}`" for name in _STRING_FORMS)
            raise ManifestError(f"unknown variant `{data}`, expected one of {expected}")
        return make()
    if isinstance(data, dict):
        tag = _require(data, "type-name", _string)
        parse = _TABLE_PARSERS.get(tag)
        if parse is None:
            expected = ", ".join(f"`{name}`" for name in _TABLE_PARSERS)
            raise ManifestError(f"unknown variant `{tag}`, expected one of {expected}")
        return parse(data)
    raise ManifestError(f"expected string or map, found {type(data).__name__}")


def parse_config_schema(data: Any) -> ConfigSchema:
    """Parse one configuration option: its title, description and type."""
    table = _table(data, "schema")
    return ConfigSchema(
        title=_require(table, "title", _string),
        description=_get(table, "description", _string, None),
        config_type=_require(table, "type", _config_type),
    )


def parse_manifest(text: str) -> PluginManifest:
    """Parse the TOML text of a plugin manifest."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"invalid TOML: {e}") from e
    return PluginManifest.from_dict(data)