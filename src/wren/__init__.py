"""Wren — server-side page rendering for route-driven sites.

Resolves a request path against a static route tree, preloads the data
the matched pages need, renders them with Jinja2, and answers with a
complete HTML document carrying the page's stylesheets, scripts, and
SEO tags.

Basic usage::

    from wren import App, AppConfig, RouteDefinition

    async def load_posts(context):
        context.store["posts"] = await context.api.get("/posts")

    app = App(
        routes=[
            RouteDefinition("/", template="layout.html", seo={"title": "Blog"}, children=(
                RouteDefinition("/", template="posts.html", preload=load_posts),
            )),
        ],
        config=AppConfig(secret_key="s3cr3t", api_base_url="https://api.example.com"),
    )

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "ApiClient",
    "ApiError",
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "MethodNotAllowed",
    "NotFound",
    "PreloadError",
    "Redirect",
    "Request",
    "RequestContext",
    "Response",
    "RouteDefinition",
    "Storage",
    "WrenError",
    "get_request",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name == "App":
        from wren.app import App

        return App

    if name == "AppConfig":
        from wren.config import AppConfig

        return AppConfig

    if name == "Request":
        from wren.http.request import Request

        return Request

    if name in ("Response", "Redirect"):
        from wren.http import response

        return getattr(response, name)

    if name == "RouteDefinition":
        from wren.routing.route import RouteDefinition

        return RouteDefinition

    if name in ("RequestContext", "get_request"):
        from wren import context

        return getattr(context, name)

    if name == "ApiClient":
        from wren.api import ApiClient

        return ApiClient

    if name == "Storage":
        from wren.storage import Storage

        return Storage

    if name in (
        "ApiError",
        "ConfigurationError",
        "HTTPError",
        "MethodNotAllowed",
        "NotFound",
        "PreloadError",
        "WrenError",
    ):
        from wren import errors

        return getattr(errors, name)

    msg = f"module 'wren' has no attribute {name!r}"
    raise AttributeError(msg)
