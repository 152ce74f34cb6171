"""Run configuration: option merging, validation and file resolution."""

from __future__ import annotations

import codecs
import json
import re
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from mqstrip.errors import ConfigError
from mqstrip.files import clean_suffix, resolve_source_files
from mqstrip.model.widths import EMPTY_WIDTHS, to_width_set

DEFAULT_OPTIONS: dict[str, Any] = {
    "extract": None,
    "ignore": None,
    "override_original": False,
    "stripped_suffix": "stripped",
    "encoding": "utf-8",
}

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass(frozen=True)
class RunConfiguration:
    """Resolved, immutable options for a single run."""

    files: tuple[str, ...]
    dest: str
    widths: frozenset[str]
    extract: frozenset[str] = EMPTY_WIDTHS
    override_original: bool = False
    stripped_suffix: str = "stripped"
    encoding: str = "utf-8"


def normalize_key(key: str) -> str:
    """``"overrideOriginal"`` -> ``"override_original"``."""
    return _CAMEL_RE.sub("_", key).lower().replace("-", "_")


def normalize_options(options: Mapping[str, Any]) -> dict[str, Any]:
    return {normalize_key(k): v for k, v in options.items()}


def merge_options(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Deep-merge option layers; later layers win and ``None`` never overrides."""
    merged: dict[str, Any] = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in normalize_options(layer).items():
            if value is None:
                merged.setdefault(key, None)
                continue
            current = merged.get(key)
            if isinstance(current, Mapping) and isinstance(value, Mapping):
                merged[key] = merge_options(current, value)
            else:
                merged[key] = value
    return merged


def load_config_file(path: str | Path) -> dict[str, Any]:
    """Load a JSON options file."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError("config", f"Cannot read config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError("config", f"Config file {path} must contain a JSON object")
    return data


def _widths_option(options: Mapping[str, Any], field: str, *keys: str) -> frozenset[str]:
    value = None
    for key in keys:
        if options.get(key) is not None:
            value = options[key]
            break
    try:
        return to_width_set(value)
    except TypeError as exc:
        raise ConfigError(field, f"Invalid value for {field}: {exc}") from exc


def resolve_configuration(options: Mapping[str, Any]) -> RunConfiguration:
    """Validate raw options and resolve the source file list.

    Accepts camelCase or snake_case keys. ``files`` (a pre-resolved list)
    takes precedence over ``src`` (a glob pattern or list of patterns).
    Raises :class:`ConfigError` naming the offending option.
    """
    opts = merge_options(DEFAULT_OPTIONS, options)

    widths = _widths_option(opts, "widths", "widths", "width")
    if not widths:
        raise ConfigError("widths")

    dest = opts.get("dest")
    if not dest:
        raise ConfigError("dest")
    dest = str(dest)

    extract = _widths_option(opts, "extract", "extract")

    encoding = str(opts.get("encoding") or "utf-8")
    try:
        codecs.lookup(encoding)
    except LookupError as exc:
        raise ConfigError("encoding", f"Unknown encoding: {encoding}") from exc

    suffix = clean_suffix(str(opts.get("stripped_suffix") or ""))
    if not suffix:
        raise ConfigError("strippedSuffix", "strippedSuffix must not be empty")

    src = opts.get("files") or opts.get("src")
    if not src:
        raise ConfigError("src", "Missing required option: src (or a list of files)")

    files = resolve_source_files(
        src,
        dest=dest,
        stripped_suffix=suffix,
        ignore=opts.get("ignore"),
    )
    if not files:
        raise ConfigError("src", f"No source files matched {src!r}")

    return RunConfiguration(
        files=tuple(files),
        dest=dest,
        widths=widths,
        extract=extract,
        override_original=bool(opts.get("override_original")),
        stripped_suffix=suffix,
        encoding=encoding,
    )
