"""Tests for wren.pages.preload — concurrent, all-settled preload steps."""

import anyio
import pytest

from conftest import make_context
from wren.errors import HTTPError, NotFound, PreloadError
from wren.pages.preload import preload, preload_steps
from wren.routing.route import RouteDefinition


class TestPreloadSteps:
    def test_collects_root_first(self) -> None:
        def a(context): ...
        def b(context): ...

        chain = (RouteDefinition("/", preload=a), RouteDefinition("x"), RouteDefinition("y", preload=b))
        assert preload_steps(chain) == [a, b]


class TestPreload:
    async def test_no_steps_returns_immediately(self) -> None:
        context = make_context()
        await preload((RouteDefinition("/"), RouteDefinition("about")), context)
        assert context.store == {}

    async def test_empty_chain(self) -> None:
        await preload((), make_context())

    async def test_sync_and_async_steps(self) -> None:
        def load_menu(context) -> None:
            context.store["menu"] = ["home"]

        async def load_posts(context) -> None:
            await anyio.sleep(0)
            context.store["posts"] = [1, 2]

        context = make_context()
        chain = (RouteDefinition("/", preload=load_menu), RouteDefinition("blog", preload=load_posts))
        await preload(chain, context)
        assert context.store == {"menu": ["home"], "posts": [1, 2]}

    async def test_steps_run_concurrently(self) -> None:
        started = anyio.Event()

        async def waits(context) -> None:
            # Only completes if the sibling starts while this one is waiting
            with anyio.fail_after(1):
                await started.wait()
            context.store["waited"] = True

        async def signals(context) -> None:
            started.set()

        context = make_context()
        chain = (RouteDefinition("/", preload=waits), RouteDefinition("x", preload=signals))
        await preload(chain, context)
        assert context.store["waited"] is True

    async def test_failure_does_not_cancel_siblings(self) -> None:
        async def fails(context) -> None:
            raise RuntimeError("boom")

        async def slow(context) -> None:
            await anyio.sleep(0.01)
            context.store["slow"] = "done"

        context = make_context()
        chain = (RouteDefinition("/", preload=fails), RouteDefinition("x", preload=slow))
        with pytest.raises(PreloadError) as exc_info:
            await preload(chain, context)

        assert context.store["slow"] == "done"
        assert isinstance(exc_info.value.cause, RuntimeError)
        assert exc_info.value.status == 500

    async def test_status_taken_from_failure(self) -> None:
        async def missing(context) -> None:
            raise NotFound("no such post")

        with pytest.raises(PreloadError) as exc_info:
            await preload((RouteDefinition("/", preload=missing),), make_context())
        assert exc_info.value.status == 404

    async def test_first_failure_wins(self) -> None:
        async def fails_first(context) -> None:
            raise HTTPError(status=503, detail="first")

        async def fails_later(context) -> None:
            await anyio.sleep(0.01)
            raise HTTPError(status=502, detail="later")

        chain = (RouteDefinition("/", preload=fails_later), RouteDefinition("x", preload=fails_first))
        with pytest.raises(PreloadError) as exc_info:
            await preload(chain, make_context())
        assert exc_info.value.status == 503

    async def test_failures_are_logged(self, caplog) -> None:
        def broken(context) -> None:
            raise ValueError("bad data")

        with pytest.raises(PreloadError):
            await preload((RouteDefinition("/", preload=broken),), make_context())
        assert any(r.name == "wren.preload" for r in caplog.records)
