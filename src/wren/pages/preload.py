"""Concurrent data preloading for a matched route chain.

Every route in the chain may declare a ``preload`` step. All steps are
started at once in an anyio task group and the orchestrator returns only
after each one has settled. A failing step never cancels its siblings;
once everything has settled the first failure observed is raised as a
single ``PreloadError``.

Steps receive the ``RequestContext`` and communicate by mutating it
(typically ``context.store``); return values are ignored::

    async def load_post(context):
        slug = context.params["slug"]
        context.store["post"] = await context.api.get(f"/posts/{slug}")
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

import anyio

from wren._internal.invoke import invoke
from wren.context import RequestContext
from wren.errors import PreloadError
from wren.routing.route import RouteDefinition

logger = logging.getLogger("wren.preload")


def preload_steps(chain: Sequence[RouteDefinition]) -> list[Callable[..., Any]]:
    """Declared preload steps along *chain*, root first."""
    return [route.preload for route in chain if route.preload is not None]


async def preload(chain: Sequence[RouteDefinition], context: RequestContext) -> None:
    """Run all preload steps of *chain* concurrently and wait for them.

    Returns immediately when no route declares a step.

    Raises:
        PreloadError: If any step raised. Wraps the first failure to
            occur; the others are logged.
    """
    steps = preload_steps(chain)
    if not steps:
        return

    failures: list[Exception] = []

    async def _run(step: Callable[..., Any]) -> None:
        try:
            await invoke(step, context)
        except Exception as exc:
            logger.warning(
                "Preload step %s failed for %s: %r",
                getattr(step, "__qualname__", step),
                context.pathname,
                exc,
            )
            failures.append(exc)

    async with anyio.create_task_group() as tg:
        for step in steps:
            tg.start_soon(_run, step)

    if failures:
        raise PreloadError(failures[0]) from failures[0]
