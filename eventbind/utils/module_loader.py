"""General utility functions."""

import importlib
from typing import Any

__all__ = ("import_string",)


def import_string(dotted_path: str) -> "Any":
    """Dotted Path Import.

    Import a dotted module path and return the attribute/class designated by the
    last name in the path. ``package.module:attr`` is accepted as well as
    ``package.module.attr``. Raise ImportError if the import failed.

    Args:
        dotted_path: The path of the module to import.

    Raises:
        ImportError: Could not import the module.

    Returns:
        object: The imported object.
    """
    if ":" in dotted_path:
        module_path, _, attr_path = dotted_path.partition(":")
        try:
            module = importlib.import_module(module_path)
        except Exception as e:
            msg = f"Could not import '{dotted_path}': {e}"
            raise ImportError(msg) from e
        return _resolve_attrs(module, attr_path.split("."), dotted_path)

    parts = dotted_path.split(".")
    for i in range(len(parts), 0, -1):
        module_path = ".".join(parts[:i])
        try:
            module = importlib.import_module(module_path)
            break
        except ModuleNotFoundError:
            continue
        except Exception as e:
            msg = f"Could not import '{dotted_path}': {e}"
            raise ImportError(msg) from e
    else:
        msg = f"{dotted_path} doesn't look like a module path"
        raise ImportError(msg)
    return _resolve_attrs(module, parts[i:], dotted_path)


def _resolve_attrs(module: Any, attrs: "list[str]", dotted_path: str) -> Any:
    obj = module
    for attr in attrs:
        if not attr:
            msg = f"Could not import '{dotted_path}': empty attribute name"
            raise ImportError(msg)
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            msg = f"Module '{module.__name__}' has no attribute '{attr}' in '{dotted_path}'"
            raise ImportError(msg) from e
    return obj
