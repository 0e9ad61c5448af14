from __future__ import annotations

from dataclasses import dataclass
from functools import cache
from pathlib import Path
from typing import Any

import yaml
from beartype import beartype

from declmeta.utils.errors import InputValidationError
from declmeta.utils.kinds import MatchMode

DEFAULTS_PATH = Path(__file__).with_name("defaults.yaml")


@beartype
@dataclass(frozen=True)
class ReflectionSettings:
    """Runtime defaults applied when callers omit optional arguments.

    Attributes:
        autoload (bool): Import modules named by dotted class paths on demand.
        match_mode (MatchMode): Default metadata type matching mode.
        max_ancestor_depth (int | None): Optional limit on ancestor walks.
            `None` keeps walks unbounded.
    """

    autoload: bool = True
    match_mode: MatchMode = MatchMode.INSTANCE_OF
    max_ancestor_depth: int | None = None


@beartype
@cache
def _load_yaml_config(config_path: Path) -> dict[str, Any]:
    """Load one YAML config file and validate mapping root."""

    if not config_path.exists() or not config_path.is_file():
        raise InputValidationError(f"Missing config file: {config_path.resolve()}")

    with config_path.open("r", encoding="utf-8") as handle:
        loaded = yaml.safe_load(handle) or {}
    if not isinstance(loaded, dict):
        raise InputValidationError(
            f"Config file `{config_path.name}` must contain a YAML mapping."
        )
    return loaded


@beartype
def _parse_settings(raw: dict[str, Any], source: str) -> ReflectionSettings:
    unknown = sorted(set(raw) - {"autoload", "match_mode", "max_ancestor_depth"})
    if unknown:
        raise InputValidationError(
            f"Unknown settings in `{source}`: {', '.join(unknown)}"
        )

    autoload = raw.get("autoload", True)
    if not isinstance(autoload, bool):
        raise InputValidationError(f"`autoload` in `{source}` must be a boolean.")

    try:
        match_mode = MatchMode(raw.get("match_mode", MatchMode.INSTANCE_OF.value))
    except ValueError as exc:
        allowed = ", ".join(mode.value for mode in MatchMode)
        raise InputValidationError(
            f"`match_mode` in `{source}` must be one of: {allowed}."
        ) from exc

    depth = raw.get("max_ancestor_depth")
    if depth is not None and (
        isinstance(depth, bool) or not isinstance(depth, int) or depth < 1
    ):
        raise InputValidationError(
            f"`max_ancestor_depth` in `{source}` must be a positive integer or null."
        )

    return ReflectionSettings(
        autoload=autoload,
        match_mode=match_mode,
        max_ancestor_depth=depth,
    )


@beartype
def load_settings(config_path: Path | None = None) -> ReflectionSettings:
    """Load reflection settings from YAML.

    Args:
        config_path (Path | None): Override file. Defaults to the packaged
            `defaults.yaml`.

    Returns:
        ReflectionSettings: Parsed and validated settings.

    !!! warning

        Loaded files are cached for the life of the process. Restart the
        interpreter after editing a settings file.
    """

    path = config_path or DEFAULTS_PATH
    return _parse_settings(_load_yaml_config(path), path.name)
