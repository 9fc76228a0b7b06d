"""Asset selection — which built stylesheets and scripts a page gets.

The build step emits a manifest of output files. Module-scoped bundles
are named ``mod-<module>...`` (e.g. ``mod-blog.3f2a.css``); everything
else is shared. Every function here is a pure, order-preserving filter
over path strings.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger("wren.assets")

MODULE_PREFIX = "mod-"
WORKER_SCRIPTS: tuple[str, ...] = ("service-worker.js",)


def extract_files(assets: Any, extension: str) -> tuple[str, ...]:
    """Return every path in *assets* ending with *extension*.

    *assets* may be a single path, a sequence of paths, or a mapping of
    chunk names to paths or lists of paths (nested arbitrarily, as
    bundler manifests are). Order of first appearance is preserved and
    duplicates are dropped, so re-applying to its own output is a no-op.
    ``None`` or an empty manifest yields an empty tuple.
    """
    seen: set[str] = set()
    result: list[str] = []
    for path in _flatten(assets):
        if path.endswith(extension) and path not in seen:
            seen.add(path)
            result.append(path)
    return tuple(result)


def _flatten(assets: Any) -> Iterable[str]:
    if assets is None:
        return
    if isinstance(assets, str):
        yield assets
    elif isinstance(assets, Mapping):
        for value in assets.values():
            yield from _flatten(value)
    elif isinstance(assets, Iterable):
        for value in assets:
            yield from _flatten(value)


def file_name(path: str) -> str:
    """Last path component: ``"/static/mod-blog.css"`` -> ``"mod-blog.css"``."""
    return path.rsplit("/", 1)[-1]


def module_of(path: str) -> str | None:
    """The module an asset is namespaced to, or ``None`` if it is shared.

    ``mod-blog.3f2a.css`` -> ``"blog"``; ``main.css`` -> ``None``.
    """
    name = file_name(path)
    if not name.startswith(MODULE_PREFIX):
        return None
    return name[len(MODULE_PREFIX):].split(".", 1)[0]


def is_worker_script(path: str) -> bool:
    return file_name(path).startswith(WORKER_SCRIPTS)


def filter_page_assets(paths: Sequence[str], module_id: str | None) -> tuple[str, ...]:
    """Scripts for the main page bundle.

    Drops bundles namespaced to any module other than *module_id* and
    auxiliary worker scripts, which are registered by the client.
    """
    return tuple(
        path
        for path in paths
        if not is_worker_script(path) and module_of(path) in (None, module_id)
    )


def filter_module_assets(paths: Sequence[str], module_id: str | None) -> tuple[str, ...]:
    """Stylesheets for the page: shared ones plus the active module's."""
    result: list[str] = []
    for path in paths:
        owner = module_of(path)
        if owner is None or (module_id is not None and owner == module_id):
            result.append(path)
    return tuple(result)


@dataclass(frozen=True, slots=True)
class AssetManifest:
    """Stylesheets and scripts selected for one request."""

    css: tuple[str, ...] = ()
    js: tuple[str, ...] = ()

    @classmethod
    def select(cls, assets: Any, module_id: str | None) -> AssetManifest:
        """Build the per-request manifest from the raw build manifest."""
        return cls(
            css=filter_module_assets(extract_files(assets, ".css"), module_id),
            js=filter_page_assets(extract_files(assets, ".js"), module_id),
        )


# An asset source (sync or async) returns the raw build manifest; called once per request
AssetSource = Callable[[], Any]


def manifest_file_source(path: str | Path) -> AssetSource:
    """Asset source that reads a JSON build manifest from disk.

    The file is re-read on every call so a rebuild is picked up without
    a restart. A missing file yields an empty manifest (and a warning
    once), matching an app that ships no bundles.
    """
    manifest_path = Path(path)
    warned = False

    def load() -> Any:
        nonlocal warned
        try:
            return json.loads(manifest_path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            if not warned:
                logger.warning("Asset manifest %s not found; serving without bundles", manifest_path)
                warned = True
            return ()

    return load
