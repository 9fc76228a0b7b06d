"""The view layer: route chains to body markup.

Each route in a matched chain may name a template. Templates are
rendered inside-out: the leaf first, then each ancestor with the
rendered child available as ``content``, like nested layouts::

    routes = [
        RouteDefinition("/", template="layout.html", children=(
            RouteDefinition("blog/{slug}", template="post.html"),
        )),
    ]

    {# layout.html #}
    <main>{{ content }}</main>

Rendering is synchronous: all data was gathered by the preload steps and
sits in ``store``. Templates signal a redirect or a status override
through the ``redirect()`` and ``set_status()`` callables, which write to
the request's ``RequestContext``::

    {% if not store.user %}{{ redirect("/login") }}{% endif %}
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from jinja2 import Environment
from markupsafe import Markup

from wren.context import RequestContext
from wren.routing.route import RouteDefinition


@dataclass(frozen=True, slots=True)
class ViewTree:
    """Rendered body markup plus the templates that produced it.

    Implements ``__html__`` so the document shell embeds it unescaped.
    """

    markup: Markup = Markup("")
    templates: tuple[str, ...] = ()

    def __html__(self) -> Markup:
        return self.markup

    def __str__(self) -> str:
        return str(self.markup)


def _view_helpers(context: RequestContext) -> dict[str, Any]:
    """Per-request callables exposed to templates.

    They return an empty string so ``{{ redirect(...) }}`` prints nothing.
    """

    def redirect(url: str, status: int | None = None) -> str:
        context.redirect(url, status)
        return ""

    def set_status(status: int) -> str:
        context.set_status(status)
        return ""

    return {"redirect": redirect, "set_status": set_status}


class ViewRenderer:
    """Renders views with distinct entry points per outcome.

    - ``render_routes``: the matched chain (normal page).
    - ``render_not_found``: no route matched.
    - ``render_error``: preload or render failed.
    """

    __slots__ = ("_env", "_error_template", "_not_found_template")

    def __init__(
        self,
        env: Environment,
        *,
        not_found_template: str = "404.html",
        error_template: str = "error.html",
    ) -> None:
        self._env = env
        self._not_found_template = not_found_template
        self._error_template = error_template

    def _render(self, template_name: str, variables: dict[str, Any]) -> Markup:
        template = self._env.get_template(template_name)
        return Markup(template.render(variables))

    def _variables(
        self,
        *,
        url: str,
        context: RequestContext,
        store: Mapping[str, Any],
        **extra: Any,
    ) -> dict[str, Any]:
        # Store entries are exposed by name; fixed names take precedence
        return {
            **store,
            "url": url,
            "params": context.params,
            "store": store,
            "context": context,
            **_view_helpers(context),
            **extra,
        }

    def render_routes(
        self,
        *,
        url: str,
        context: RequestContext,
        routes: Sequence[RouteDefinition],
        store: Mapping[str, Any],
    ) -> ViewTree:
        """Render the chain inside-out, leaf template innermost.

        A route with a static ``redirect`` short-circuits rendering; the
        most specific one wins.
        """
        for route in reversed(routes):
            if route.redirect is not None:
                context.redirect(route.redirect)
                return ViewTree()

        html = Markup("")
        rendered: list[str] = []
        for route in reversed(routes):
            if route.template is None:
                continue
            html = self._render(
                route.template,
                self._variables(
                    url=url,
                    context=context,
                    store=store,
                    routes=routes,
                    route=route,
                    content=html,
                ),
            )
            rendered.append(route.template)
        return ViewTree(markup=html, templates=tuple(reversed(rendered)))

    def render_not_found(
        self,
        *,
        url: str,
        context: RequestContext,
        store: Mapping[str, Any],
    ) -> ViewTree:
        """Render the not-found view."""
        html = self._render(
            self._not_found_template,
            self._variables(url=url, context=context, store=store, routes=()),
        )
        return ViewTree(markup=html, templates=(self._not_found_template,))

    def render_error(
        self,
        *,
        url: str,
        context: RequestContext,
        store: Mapping[str, Any],
        error: BaseException,
        status: int,
    ) -> ViewTree:
        """Render the generic error view for *status*."""
        html = self._render(
            self._error_template,
            self._variables(
                url=url,
                context=context,
                store=store,
                routes=(),
                error=error,
                status=status,
            ),
        )
        return ViewTree(markup=html, templates=(self._error_template,))
