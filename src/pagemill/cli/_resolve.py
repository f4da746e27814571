"""Config import resolution — resolves ``"module:attribute"`` strings to BuildConfig instances.

Shared utility used by every ``pagemill`` subcommand to locate the
user's build configuration.
"""

import dataclasses
import importlib
import sys
from typing import TYPE_CHECKING

from pagemill.config import BuildConfig

if TYPE_CHECKING:
    from pagemill.session import BuildSession


def resolve_config(import_string: str) -> BuildConfig:
    """Resolve an import string to a :class:`BuildConfig`.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"config"`` (e.g. ``"site"`` resolves to
    ``site.config``).

    Supports factory functions: if the resolved object is callable and
    not a BuildConfig instance, it will be called.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a ``BuildConfig`` or a
            factory returning one.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "config"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, BuildConfig):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, BuildConfig):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a pagemill.BuildConfig instance"
        raise TypeError(msg)

    return obj


def open_session(import_string: str, **overrides: object) -> "BuildSession":
    """Resolve a config, apply CLI overrides, and start a build session.

    Prints the problem to stderr and exits with code 1 when the config
    cannot be found or the session cannot start.
    """
    from pagemill.errors import PagemillError
    from pagemill.session import BuildSession

    try:
        config = resolve_config(import_string)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    changes = {key: value for key, value in overrides.items() if value is not None}
    if changes:
        config = dataclasses.replace(config, **changes)

    try:
        return BuildSession.from_config(config)
    except PagemillError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
