"""Tests for wren.routing.route — path parsing and route definitions."""

import pytest

from wren.errors import ConfigurationError
from wren.routing.route import RouteDefinition, parse_path, walk


def load_nothing(context) -> None:
    pass


class TestParsePath:
    def test_root(self) -> None:
        assert parse_path("/") == ()

    def test_static_segments(self) -> None:
        segments = parse_path("/blog/archive")
        assert [s.value for s in segments] == ["blog", "archive"]
        assert not any(s.is_param for s in segments)

    def test_param(self) -> None:
        (segment,) = parse_path("{slug}")
        assert segment.is_param
        assert segment.param_name == "slug"
        assert segment.param_type == "str"

    def test_typed_param(self) -> None:
        (segment,) = parse_path("{id:int}")
        assert segment.param_name == "id"
        assert segment.param_type == "int"

    def test_catch_all(self) -> None:
        segments = parse_path("docs/{rest:path}")
        assert segments[-1].is_catch_all

    def test_angle_bracket_syntax_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="<param>"):
            parse_path("/posts/<slug>")

    def test_unknown_converter(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown converter"):
            parse_path("{id:uuid}")

    def test_catch_all_must_be_last(self) -> None:
        with pytest.raises(ConfigurationError, match="must be last"):
            parse_path("{rest:path}/edit")


class TestRouteDefinition:
    def test_frozen(self) -> None:
        route = RouteDefinition("/")
        with pytest.raises(AttributeError):
            route.path = "/other"  # type: ignore[misc]

    def test_seo_is_read_only(self) -> None:
        route = RouteDefinition("/", seo={"title": "Home"})
        with pytest.raises(TypeError):
            route.seo["title"] = "Other"  # type: ignore[index]

    def test_exact_by_default(self) -> None:
        assert RouteDefinition("about").exact
        assert RouteDefinition("/", children=(RouteDefinition("about"),)).exact

    def test_invalid_path_fails_at_definition(self) -> None:
        with pytest.raises(ConfigurationError):
            RouteDefinition("/posts/<id>")


class TestFromDict:
    def test_nested(self) -> None:
        route = RouteDefinition.from_dict(
            {
                "path": "/",
                "module": "main",
                "seo": {"title": "Site"},
                "routes": [{"path": "blog", "module": "blog", "template": "blog.html"}],
            }
        )
        assert route.module == "main"
        assert route.seo["title"] == "Site"
        assert route.children[0].path == "blog"
        assert route.children[0].template == "blog.html"

    def test_preload_import_string(self) -> None:
        route = RouteDefinition.from_dict({"path": "/", "preload": "test_route:load_nothing"})
        assert route.preload is load_nothing

    def test_preload_import_string_needs_attribute(self) -> None:
        with pytest.raises(ConfigurationError, match="module:attribute"):
            RouteDefinition.from_dict({"path": "/", "preload": "test_route"})

    def test_defaults(self) -> None:
        route = RouteDefinition.from_dict({})
        assert route.path == "/"
        assert route.children == ()
        assert dict(route.seo) == {}


class TestToDict:
    def test_json_safe(self) -> None:
        route = RouteDefinition(
            "/",
            module="main",
            seo={"title": "Site"},
            preload=load_nothing,
            children=(RouteDefinition("about", template="about.html"),),
        )
        data = route.to_dict()
        assert data["preload"] == "test_route:load_nothing"
        assert data["seo"] == {"title": "Site"}
        assert data["exact"] is True
        assert data["children"][0]["template"] == "about.html"
        assert data["children"][0]["exact"] is True

    def test_round_trip_through_dict(self) -> None:
        route = RouteDefinition("blog", module="blog", children=(RouteDefinition("{slug}"),))
        assert RouteDefinition.from_dict(route.to_dict()).to_dict() == route.to_dict()


class TestWalk:
    def test_depth_first(self) -> None:
        routes = (
            RouteDefinition("/", children=(RouteDefinition("a"), RouteDefinition("b"))),
            RouteDefinition("c"),
        )
        assert [(depth, route.path) for depth, route in walk(routes)] == [
            (0, "/"),
            (1, "a"),
            (1, "b"),
            (0, "c"),
        ]
