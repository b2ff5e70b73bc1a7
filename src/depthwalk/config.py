"""
TOML-based config file loading for depthwalk.

Searches for `.depthwalk.toml`, `depthwalk.toml`, or `pyproject.toml [tool.depthwalk]`
walking up from the current directory. Config values are merged with CLI flags
using three-way precedence: explicit CLI flags > config file > built-in defaults.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, TypeVar, cast

from depthwalk.walker import check_depth

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]


@dataclass
class DepthwalkConfig:
    """
    Parsed config from a TOML file. Fields are `None` when not set in the config,
    allowing the merge logic to distinguish "not configured" from "explicitly set
    to default value".
    """

    depth: int | None = None
    filter: str | None = None
    file: bool | None = None
    case_sensitive: bool | None = None


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".depthwalk.toml", "depthwalk.toml", "pyproject.toml"]

_VALID_FIELDS = {f.name for f in fields(DepthwalkConfig)}

_FIELD_TYPES: dict[str, type] = {
    "depth": int,
    "filter": str,
    "file": bool,
    "case_sensitive": bool,
}


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.depthwalk.toml` >
    `depthwalk.toml` > `pyproject.toml` (only if it has `[tool.depthwalk]`).
    """
    directory = start_dir.resolve()
    for candidate_dir in (directory, *directory.parents):
        for filename in _CONFIG_FILENAMES:
            candidate = candidate_dir / filename
            if not candidate.is_file():
                continue
            if filename != "pyproject.toml" or _has_tool_table(candidate):
                return candidate
    return None


def _has_tool_table(pyproject: Path) -> bool:
    """True if `pyproject` parses and has a `[tool.depthwalk]` table."""
    try:
        tool = tomllib.loads(pyproject.read_text()).get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False
    return "depthwalk" in tool


def load_config(config_path: Path) -> DepthwalkConfig:
    """
    Load a `DepthwalkConfig` from a TOML file. Supports both standalone
    `depthwalk.toml` / `.depthwalk.toml` and `pyproject.toml` (extracts
    `[tool.depthwalk]`). TOML kebab-case keys are mapped to Python snake_case.

    Raises `ValueError` for values of the wrong type or an out-of-range depth.
    """
    data = tomllib.loads(config_path.read_text())

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get("depthwalk", {})

    try:
        return _parse_config_data(data)
    except ValueError as e:
        raise ValueError(f"Invalid config in {config_path}: {e}") from e


def _parse_config_data(data: dict[str, Any]) -> DepthwalkConfig:
    """Parse a flat or sectioned TOML dict into DepthwalkConfig."""
    # Flatten tables: keys inside any table (e.g. [defaults]) read as top-level keys
    flat: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, dict):
            for sub_key, sub_value in cast(dict[str, Any], value).items():
                flat[sub_key] = sub_value
        else:
            flat[key] = value

    mapped: dict[str, Any] = {}
    for key, value in flat.items():
        snake_key = key.replace("-", "_")
        if snake_key not in _VALID_FIELDS:
            continue
        expected = _FIELD_TYPES[snake_key]
        # bool is an int subclass, so `depth = true` needs its own check
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            raise ValueError(f"`{key}` must be of type {expected.__name__}, got {value!r}")
        mapped[snake_key] = value

    if "depth" in mapped:
        check_depth(mapped["depth"])

    return DepthwalkConfig(**mapped)


_T = TypeVar("_T")


def merge_cli_with_config(
    cli_opts: _T,
    config: DepthwalkConfig | None,
    explicit_flags: set[str],
) -> _T:
    """
    Merge CLI options with config file settings.

    Precedence: explicit CLI flags > config file > built-in defaults.
    Config field names match `Options` field names one to one.
    """
    if config is None:
        return cli_opts

    for cfg_field in fields(DepthwalkConfig):
        cfg_value = getattr(config, cfg_field.name)
        if cfg_value is None:
            continue  # Not set in config

        # Skip if CLI explicitly set this flag
        if cfg_field.name in explicit_flags:
            continue

        if hasattr(cli_opts, cfg_field.name):
            setattr(cli_opts, cfg_field.name, cfg_value)

    return cli_opts
