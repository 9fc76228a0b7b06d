"""Shared fixtures: a page template directory and request helpers."""

from pathlib import Path
from typing import Any

import pytest

from wren.api import ApiClient
from wren.config import AppConfig
from wren.context import RequestContext
from wren.http.request import Request
from wren.storage import Storage, StorageConfig
from wren.templating.integration import create_environment
from wren.templating.views import ViewRenderer

PAGE_TEMPLATES = {
    "layout.html": "<main>{{ content }}</main>",
    "home.html": "<h1>Home</h1>",
    "blog.html": '<section class="blog">{{ content }}</section>',
    "post.html": "<article>{{ post.title }}</article>",
    "account.html": '{% if not user %}{{ redirect("/login") }}{% endif %}<p>Account</p>',
    "teapot.html": "{{ set_status(418) }}<p>short and stout</p>",
    "broken.html": "{{ explode() }}",
    "params.html": "<p>{{ params.slug }}</p>",
}

SECRET = "test-secret-key"


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    for name, source in PAGE_TEMPLATES.items():
        (tmp_path / name).write_text(source)
    return tmp_path


@pytest.fixture
def env(template_dir: Path):
    return create_environment(AppConfig(template_dir=template_dir), {}, {})


@pytest.fixture
def renderer(env) -> ViewRenderer:
    return ViewRenderer(env)


def make_request(
    path: str = "/",
    *,
    method: str = "GET",
    cookies: str = "",
    assets: Any = None,
) -> Request:
    """Build a Request without going through ASGI."""
    headers: list[tuple[bytes, bytes]] = []
    if cookies:
        headers.append((b"cookie", cookies.encode("latin-1")))

    scope = {"type": "http", "method": method, "path": path, "headers": headers}
    return Request.from_asgi(scope, assets=assets)


def make_context(path: str = "/", **kwargs: Any) -> RequestContext:
    """A RequestContext with fresh storage and an unconnected API client."""
    storage = Storage(make_request(path), StorageConfig(secret_key=SECRET))
    return RequestContext(
        storage=storage,
        api=ApiClient(storage=storage),
        pathname=path,
        **kwargs,
    )
