"""Tests for wren.routing.resolver — chain resolution over the route tree."""

from wren.routing import RouteDefinition, resolve
from wren.routing.resolver import split_path

ROUTES = (
    RouteDefinition(
        "/",
        module="main",
        template="layout.html",
        children=(
            RouteDefinition("/", template="home.html"),
            RouteDefinition(
                "blog",
                module="blog",
                template="blog.html",
                children=(
                    RouteDefinition("/", template="index.html"),
                    RouteDefinition("{slug}", template="post.html"),
                ),
            ),
            RouteDefinition("users/{id:int}", module="users", template="user.html"),
            RouteDefinition("docs/{rest:path}", template="docs.html"),
            RouteDefinition("zoom/{level:float}", template="zoom.html"),
            RouteDefinition("about", template="about.html"),
        ),
    ),
)


def paths(chain) -> list[str]:
    return [route.path for route in chain]


class TestSplitPath:
    def test_root(self) -> None:
        assert split_path("/") == []

    def test_trailing_slash(self) -> None:
        assert split_path("/blog/hello/") == ["blog", "hello"]

    def test_repeated_slashes(self) -> None:
        assert split_path("//blog//hello") == ["blog", "hello"]


class TestResolve:
    def test_root(self) -> None:
        module_id, chain = resolve(ROUTES, "/")
        assert module_id == "main"
        assert [r.template for r in chain] == ["layout.html", "home.html"]

    def test_nested_module_wins(self) -> None:
        module_id, chain = resolve(ROUTES, "/blog/hello-world")
        assert module_id == "blog"
        assert [r.template for r in chain] == ["layout.html", "blog.html", "post.html"]

    def test_params_captured(self) -> None:
        resolution = resolve(ROUTES, "/blog/hello-world")
        assert resolution.params == {"slug": "hello-world"}

    def test_index_child(self) -> None:
        resolution = resolve(ROUTES, "/blog")
        assert resolution.leaf is not None
        assert resolution.leaf.template == "index.html"

    def test_typed_param(self) -> None:
        resolution = resolve(ROUTES, "/users/42")
        assert resolution.module_id == "users"
        assert resolution.params == {"id": 42}
        assert isinstance(resolution.params["id"], int)

    def test_float_param_converted(self) -> None:
        assert resolve(ROUTES, "/zoom/1.5").params == {"level": 1.5}

    def test_typed_param_mismatch_is_not_found(self) -> None:
        assert not resolve(ROUTES, "/users/alice").matched

    def test_catch_all(self) -> None:
        resolution = resolve(ROUTES, "/docs/guide/install")
        assert resolution.params == {"rest": "guide/install"}

    def test_module_inherited_from_ancestor(self) -> None:
        module_id, chain = resolve(ROUTES, "/about")
        assert module_id == "main"
        assert paths(chain) == ["/", "about"]

    def test_leaf_must_consume_whole_path(self) -> None:
        module_id, chain = resolve(ROUTES, "/about/team")
        assert chain == ()
        assert module_id is None

    def test_unmatched(self) -> None:
        resolution = resolve(ROUTES, "/nowhere")
        assert not resolution.matched
        assert resolution.chain == ()
        assert resolution.module_id is None
        assert resolution.leaf is None

    def test_empty_table(self) -> None:
        assert resolve((), "/") == resolve((), "/anything")
        assert resolve((), "/").chain == ()

    def test_deepest_chain_wins(self) -> None:
        routes = (
            RouteDefinition("shop", exact=False, template="catch.html"),
            RouteDefinition("shop", children=(RouteDefinition("cart", template="cart.html"),)),
        )
        chain = resolve(routes, "/shop/cart").chain
        assert chain[-1].template == "cart.html"

    def test_tie_goes_to_first_declared(self) -> None:
        routes = (
            RouteDefinition("{page}", template="first.html"),
            RouteDefinition("about", template="second.html"),
        )
        assert resolve(routes, "/about").chain[0].template == "first.html"

    def test_non_exact_leaf_matches_prefix(self) -> None:
        routes = (RouteDefinition("legacy", exact=False, template="legacy.html"),)
        assert resolve(routes, "/legacy/anything/else").matched

    def test_exact_parent_needs_full_match(self) -> None:
        routes = (
            RouteDefinition("a", exact=True, children=(RouteDefinition("b"),)),
        )
        assert paths(resolve(routes, "/a/b").chain) == ["a", "b"]
        assert paths(resolve(routes, "/a").chain) == ["a"]
        assert not resolve(routes, "/a/c").matched

    def test_root_layout_does_not_swallow_unknown_paths(self) -> None:
        routes = (RouteDefinition("/", children=(RouteDefinition("b"),)),)
        assert not resolve(routes, "/c").matched
        assert paths(resolve(routes, "/").chain) == ["/"]

    def test_non_exact_parent_matches_prefix(self) -> None:
        routes = (RouteDefinition("a", exact=False, children=(RouteDefinition("b"),)),)
        assert paths(resolve(routes, "/a/c").chain) == ["a"]
        assert paths(resolve(routes, "/a/b").chain) == ["a", "b"]

    def test_no_module_declared(self) -> None:
        routes = (RouteDefinition("plain"),)
        assert resolve(routes, "/plain").module_id is None
