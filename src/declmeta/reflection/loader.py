from __future__ import annotations

import builtins
import importlib
import logging
import sys
from typing import Any

from beartype import beartype

from declmeta.utils.config import load_settings

logger = logging.getLogger(__name__)

MISSING: Any = object()


def autoload_enabled(autoload: bool | None) -> bool:
    """Return `autoload`, or the configured default when it is `None`."""
    if autoload is None:
        return load_settings().autoload
    return autoload


def _import_module(module_name: str, autoload: bool) -> Any:
    module = sys.modules.get(module_name)
    if module is not None or not autoload:
        return module
    try:
        module = importlib.import_module(module_name)
    except ModuleNotFoundError as exc:
        # Only a missing prefix of the requested path means "not a module";
        # a broken import inside an existing module propagates.
        missing = exc.name or ""
        if module_name == missing or module_name.startswith(f"{missing}."):
            return None
        raise
    logger.debug("Autoloaded module %s", module_name)
    return module


@beartype
def resolve_path(path: str, autoload: bool | None = None) -> Any:
    """Resolve a dotted path such as `package.module.Class.method`.

    The longest importable module prefix is used and the remaining parts are
    looked up as attributes. A bare name falls back to `builtins`.

    Args:
        path (str): Dotted path to resolve.
        autoload (bool | None): Import modules that are not imported yet.
            `None` uses the configured default.

    Returns:
        Any: The resolved object, or `MISSING` when nothing matches.
    """

    parts = path.split(".")
    if not all(part.isidentifier() for part in parts):
        return MISSING

    load = autoload_enabled(autoload)
    for split in range(len(parts), 0, -1):
        module = _import_module(".".join(parts[:split]), load)
        if module is None:
            continue
        resolved = module
        for attribute in parts[split:]:
            resolved = getattr(resolved, attribute, MISSING)
            if resolved is MISSING:
                return MISSING
        return resolved

    if len(parts) == 1:
        return getattr(builtins, path, MISSING)
    return MISSING


@beartype
def resolve_class(name: str, autoload: bool | None = None) -> type | None:
    """Return the class named by a dotted path, or `None` if there is none."""
    resolved = resolve_path(name, autoload)
    return resolved if isinstance(resolved, type) else None


@beartype
def class_exists(name: str, autoload: bool | None = None) -> bool:
    return resolve_class(name, autoload) is not None


def qualified_name(obj: Any) -> str:
    """Return `module.qualname` for a class or function."""
    module = getattr(obj, "__module__", None)
    qualname = getattr(obj, "__qualname__", None) or getattr(obj, "__name__", repr(obj))
    if not module or module == "builtins":
        return qualname
    return f"{module}.{qualname}"
