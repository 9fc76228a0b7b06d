"""Route definitions and resolution results.

``RouteDefinition`` trees are authored once (in Python or as plain
dicts/JSON) and never mutated per request.
"""

from __future__ import annotations

import importlib
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from wren.errors import ConfigurationError
from wren.routing.params import CONVERTERS


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:    ``blog``          (is_param=False)
    Param:     ``{slug}``        (is_param=True, param_name="slug")
    Typed:     ``{id:int}``      (is_param=True, param_name="id", param_type="int")
    Catch-all: ``{rest:path}``   (is_param=True, param_type="path")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"

    @property
    def is_catch_all(self) -> bool:
        return self.is_param and self.param_type == "path"


def parse_path(path: str) -> tuple[PathSegment, ...]:
    """Parse a route path string into segments.

    Examples::

        "/"                -> ()
        "blog"             -> (PathSegment("blog"),)
        "{id:int}"         -> (PathSegment("{id:int}", is_param=True, param_type="int"),)
        "docs/{rest:path}" -> (PathSegment("docs"), PathSegment("{rest:path}", ...))

    Raises ``ConfigurationError`` for ``<param>``-style placeholders,
    unknown converters, and catch-all segments that are not last.
    """
    segments: list[PathSegment] = []
    parts = [part for part in path.strip("/").split("/") if part]
    for index, part in enumerate(parts):
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route path {path!r} uses <param> syntax. "
                "Wren expects {param} placeholders, e.g. /posts/{slug}."
            )
            raise ConfigurationError(msg)
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            if param_type not in CONVERTERS:
                msg = f"Unknown converter {param_type!r} in route path {path!r}."
                raise ConfigurationError(msg)
            if param_type == "path" and index != len(parts) - 1:
                msg = f"Catch-all segment {part!r} must be last in route path {path!r}."
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return tuple(segments)


@dataclass(frozen=True, slots=True)
class RouteDefinition:
    """A node in the static route tree.

    Attributes:
        path: Path pattern relative to the parent route (``"/"`` for a
            node that consumes nothing).
        module: Page-module that owns this route. Used to pick the
            module-scoped asset bundles. Inherited by descendants that
            declare none.
        template: View template rendered for this route. Ancestor
            templates receive the rendered child as ``content``.
        seo: SEO metadata. Descendants inherit fields they leave unset.
        preload: Data-preload step, ``step(context)``, sync or async.
            Steps mutate ``context.store``; return values are ignored.
        children: Nested routes.
        exact: When this route ends the chain, require it to have consumed
            the whole path. ``False`` lets it match a path prefix (the
            rest of the path is left to the view).
        name: Optional route name.
        redirect: Static redirect target; rendering this route redirects.
    """

    path: str
    module: str | None = None
    template: str | None = None
    seo: Mapping[str, Any] = field(default_factory=dict)
    preload: Callable[..., Any] | None = None
    children: tuple[RouteDefinition, ...] = ()
    exact: bool = True
    name: str | None = None
    redirect: str | None = None
    segments: tuple[PathSegment, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "segments", parse_path(self.path))
        object.__setattr__(self, "seo", MappingProxyType(dict(self.seo)))
        object.__setattr__(self, "children", tuple(self.children))

    # -- Plain-data conversion --

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RouteDefinition:
        """Build a route tree from its nested-dict form.

        ``preload`` may be a callable or a ``"module:attribute"`` import
        string. Children are read from ``children`` (or ``routes``).
        """
        preload = data.get("preload")
        if isinstance(preload, str):
            preload = _import_callable(preload)
        children = data.get("children", data.get("routes", ()))
        return cls(
            path=data.get("path", "/"),
            module=data.get("module"),
            template=data.get("template"),
            seo=data.get("seo") or {},
            preload=preload,
            children=tuple(cls.from_dict(child) for child in children),
            exact=data.get("exact", True),
            name=data.get("name"),
            redirect=data.get("redirect"),
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe form of this route and its descendants."""
        preload = None
        if self.preload is not None:
            module = getattr(self.preload, "__module__", None)
            qualname = getattr(self.preload, "__qualname__", type(self.preload).__name__)
            preload = f"{module}:{qualname}" if module else qualname
        return {
            "path": self.path,
            "module": self.module,
            "template": self.template,
            "seo": dict(self.seo),
            "preload": preload,
            "exact": self.exact,
            "name": self.name,
            "redirect": self.redirect,
            "children": [child.to_dict() for child in self.children],
        }


def walk(
    routes: Sequence[RouteDefinition], depth: int = 0
) -> Iterator[tuple[int, RouteDefinition]]:
    """Yield ``(depth, route)`` for every route, parents before children."""
    for route in routes:
        yield depth, route
        yield from walk(route.children, depth + 1)


def _import_callable(import_string: str) -> Callable[..., Any]:
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        msg = f"Preload {import_string!r} must use the 'module:attribute' form."
        raise ConfigurationError(msg)
    module = importlib.import_module(module_path)
    obj = module
    for part in attr_name.split("."):
        obj = getattr(obj, part)
    if not callable(obj):
        msg = f"Preload {import_string!r} resolved to a non-callable {type(obj).__name__}."
        raise ConfigurationError(msg)
    return obj


@dataclass(frozen=True, slots=True)
class Resolution:
    """Result of resolving a path against the route tree.

    Unpacks as ``module_id, chain = resolve(routes, path)``.
    An empty ``chain`` means no route matched.
    """

    module_id: str | None
    chain: tuple[RouteDefinition, ...]
    params: Mapping[str, Any] = field(default_factory=dict)

    @property
    def matched(self) -> bool:
        return bool(self.chain)

    @property
    def leaf(self) -> RouteDefinition | None:
        return self.chain[-1] if self.chain else None

    def __iter__(self) -> Iterator[Any]:
        yield self.module_id
        yield self.chain
