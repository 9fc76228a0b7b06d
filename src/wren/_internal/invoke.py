"""Invoke helpers — call sync or async callables uniformly.

Preload steps, lifecycle hooks, and asset sources can be ``def`` or
``async def``. This module keeps the sync/async check in one place.

Usage::

    from wren._internal.invoke import invoke

    result = await invoke(step, context)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it is awaitable.

    Works with both sync and async callables::

        # sync
        def load_menu(context):
            context.store["menu"] = MENU

        # async
        async def load_posts(context):
            context.store["posts"] = await context.api.get("/posts")
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
