"""Inherited SEO metadata along a matched route chain.

The most specific route wins: start from the leaf's metadata, then walk
toward the root filling in only fields that are still unset. ``None``
counts as unset, so a child can defer a field to its parents.
"""

from collections.abc import Sequence
from typing import Any

from wren.routing.route import RouteDefinition


def aggregate_seo(chain: Sequence[RouteDefinition]) -> dict[str, Any]:
    """Merge SEO metadata from leaf to root, filling absent fields only.

    Given ``[root{title: "A"}, leaf{description: "D"}]`` the result is
    ``{"description": "D", "title": "A"}``. An empty chain yields ``{}``.
    """
    merged: dict[str, Any] = {}
    for route in reversed(chain):
        for key, value in route.seo.items():
            if value is not None and merged.get(key) is None:
                merged[key] = value
    return merged
