"""ASGI app import resolution: resolves ``"module:attribute"`` strings.

Used by ``tandem serve --api`` to locate the backend application.
"""

import importlib
import inspect

from tandem._internal.asgi import ASGIApp


def resolve_app(import_string: str) -> ASGIApp:
    """Resolve an import string to an ASGI application.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"app"`` (e.g. ``"myapi"`` resolves to
    ``myapi.app``).

    A plain function (not a coroutine function) is treated as an app
    factory and called with no arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not callable, or a factory fails.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "app"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if inspect.isfunction(obj) and not inspect.iscoroutinefunction(obj):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not callable(obj):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not an ASGI app"
        raise TypeError(msg)

    return obj
