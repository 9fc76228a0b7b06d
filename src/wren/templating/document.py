"""Document composition — the last step of the page pipeline.

Wraps a render outcome's view in the document shell with the page's
stylesheets, scripts, and SEO tags, and prefixes the doctype. Redirect
outcomes produce only the redirect instruction.

Composition is deterministic: the same outcome, assets, and metadata
always serialize to the same bytes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from jinja2 import Environment

from wren.assets import AssetManifest
from wren.http.response import Redirect
from wren.templating.outcomes import (
    ErrorOutcome,
    NotFoundOutcome,
    PageOutcome,
    RedirectOutcome,
    RenderOutcome,
)

DOCTYPE = "<!DOCTYPE html>"

# SEO keys rendered as Open Graph properties when not given explicitly
_OPEN_GRAPH_MIRRORS: dict[str, str] = {
    "title": "og:title",
    "description": "og:description",
    "image": "og:image",
}

_PROPERTY_PREFIXES = ("og:", "article:", "fb:")


def meta_tags(seo: Mapping[str, Any]) -> list[tuple[str, str, str]]:
    """Flatten SEO metadata into ``(attribute, name, content)`` triples.

    ``title`` becomes the ``<title>`` element (not a meta tag) and, with
    ``description`` and ``image``, is mirrored into Open Graph tags
    unless the ``og:`` key is set explicitly. List values are joined with
    commas (``keywords``). ``None`` values are skipped.
    """
    tags: list[tuple[str, str, str]] = []
    for key, value in seo.items():
        if value is None or key in ("title", "image"):
            continue
        if isinstance(value, (list, tuple)):
            value = ", ".join(str(item) for item in value)
        attribute = "property" if key.startswith(_PROPERTY_PREFIXES) else "name"
        tags.append((attribute, key, str(value)))

    for key, og_key in _OPEN_GRAPH_MIRRORS.items():
        value = seo.get(key)
        if value is not None and og_key not in seo:
            tags.append(("property", og_key, str(value)))
    return tags


def compose(
    outcome: RenderOutcome,
    assets: AssetManifest,
    seo: Mapping[str, Any],
    *,
    env: Environment,
    template: str = "_document.html",
) -> str | Redirect:
    """Turn a render outcome into a full HTML document or a redirect.

    SEO tags are left out of error documents; stylesheets and scripts
    are always attached so the error page is styled like the rest of
    the site. Template errors propagate to the caller.
    """
    match outcome:
        case RedirectOutcome(url=url, status=status):
            return Redirect(url=url, status=status)
        case ErrorOutcome():
            seo = {}
        case PageOutcome() | NotFoundOutcome():
            pass

    shell = env.get_template(template)
    html = shell.render(
        stylesheets=assets.css,
        scripts=assets.js,
        title=seo.get("title"),
        meta=meta_tags(seo),
        children=outcome.view,
    )
    return f"{DOCTYPE}{html}"
