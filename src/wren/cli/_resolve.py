"""Locate the App a command line points at.

``wren run`` and ``wren routes`` take a target of the form
``package.module[:name]`` or ``path/to/file.py[:name]``. The name
defaults to ``app``; a zero-argument factory is called to build one.
"""

import importlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType

from wren.app import App


def _load_module(target: str) -> ModuleType:
    if not target.endswith(".py"):
        return importlib.import_module(target)
    path = Path(target).resolve()
    if not path.is_file():
        raise ModuleNotFoundError(f"No such file: {target}")
    name = path.stem
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise ModuleNotFoundError(f"Cannot import {target}")
    module = importlib.util.module_from_spec(spec)
    # Sibling imports inside the file resolve against its directory.
    sys.path.insert(0, str(path.parent))
    sys.modules[name] = module
    spec.loader.exec_module(module)
    return module


def resolve_app(target: str) -> App:
    """Import *target* and return the App it names.

    Raises ModuleNotFoundError or AttributeError when the module or name
    is missing, and TypeError when the object is neither an App nor a
    factory returning one.
    """
    location, _, name = target.rpartition(":") if ":" in target else (target, "", "")
    module = _load_module(location)
    obj = getattr(module, name or "app")

    if not isinstance(obj, App) and callable(obj):
        try:
            obj = obj()
        except Exception as exc:
            raise TypeError(f"App factory {target!r} failed: {exc}") from exc

    if not isinstance(obj, App):
        raise TypeError(f"{target!r} is a {type(obj).__name__}, not a wren.App instance")
    return obj
