"""Tests for wren.server.dispatch — exactly one outcome per request."""

import pytest

from conftest import make_context
from wren.errors import HTTPError, NotFound, PreloadError
from wren.routing import RouteDefinition, resolve
from wren.routing.route import Resolution
from wren.server.dispatch import dispatch, redirect_status
from wren.templating.outcomes import ErrorOutcome, NotFoundOutcome, PageOutcome, RedirectOutcome

ROUTES = (
    RouteDefinition(
        "/",
        template="layout.html",
        children=(
            RouteDefinition("/", template="home.html"),
            RouteDefinition("account", template="account.html"),
            RouteDefinition("teapot", template="teapot.html"),
            RouteDefinition("broken", template="broken.html"),
            RouteDefinition("moved", redirect="/elsewhere"),
        ),
    ),
)


def run(path: str, **kwargs):
    context = make_context(path)
    return dispatch(resolve(ROUTES, path), context, kwargs.pop("renderer"), **kwargs), context


class TestRedirectStatus:
    @pytest.mark.parametrize(("status", "expected"), [(None, 302), (301, 301), (307, 307), (200, 302), (404, 302)])
    def test_redirect_status(self, status, expected) -> None:
        assert redirect_status(status) == expected


class TestDispatch:
    def test_page(self, renderer) -> None:
        outcome, _ = run("/", renderer=renderer)
        assert isinstance(outcome, PageOutcome)
        assert outcome.status == 200
        assert str(outcome.view) == "<main><h1>Home</h1></main>"

    def test_status_override(self, renderer) -> None:
        outcome, _ = run("/teapot", renderer=renderer)
        assert isinstance(outcome, PageOutcome)
        assert outcome.status == 418

    def test_not_found(self, renderer) -> None:
        outcome, _ = run("/nowhere", renderer=renderer)
        assert isinstance(outcome, NotFoundOutcome)
        assert outcome.status == 404

    def test_template_redirect(self, renderer) -> None:
        outcome, _ = run("/account", renderer=renderer)
        assert outcome == RedirectOutcome(url="/login", status=302)

    def test_static_redirect(self, renderer) -> None:
        outcome, _ = run("/moved", renderer=renderer)
        assert outcome == RedirectOutcome(url="/elsewhere", status=302)

    def test_preload_error_takes_precedence(self, renderer) -> None:
        error = PreloadError(NotFound("gone"))
        outcome, _ = run("/", renderer=renderer, preload_error=error)
        assert isinstance(outcome, ErrorOutcome)
        assert outcome.status == 404
        assert isinstance(outcome.error, NotFound)

    def test_preload_error_over_not_found(self, renderer) -> None:
        error = PreloadError(RuntimeError("boom"))
        outcome, _ = run("/nowhere", renderer=renderer, preload_error=error)
        assert isinstance(outcome, ErrorOutcome)
        assert outcome.status == 500

    def test_render_failure_becomes_error(self, renderer) -> None:
        outcome, _ = run("/broken", renderer=renderer)
        assert isinstance(outcome, ErrorOutcome)
        assert outcome.status == 500
        assert 'class="error"' in str(outcome.view)

    def test_render_failure_with_status(self, renderer) -> None:
        chain = (RouteDefinition("x", template="home.html"),)
        context = make_context("/x")

        class Exploding:
            def render_routes(self, **kwargs):
                raise HTTPError(status=503, detail="upstream down")

            def render_error(self, **kwargs):
                return renderer.render_error(**kwargs)

        outcome = dispatch(Resolution(module_id=None, chain=chain), context, Exploding())
        assert isinstance(outcome, ErrorOutcome)
        assert outcome.status == 503

    def test_error_view_gets_empty_store(self, renderer) -> None:
        context = make_context("/")
        context.store["secret"] = "partial data"
        seen = {}

        class Recording:
            def render_error(self, **kwargs):
                seen.update(kwargs)
                return renderer.render_error(**kwargs)

        dispatch(resolve(ROUTES, "/"), context, Recording(), preload_error=PreloadError(RuntimeError()))
        assert seen["store"] == {}
