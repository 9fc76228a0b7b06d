"""Templating — Jinja2 environment, the view layer, and the document shell.

- ``create_environment``: one environment per app, built at freeze time.
- ``ViewRenderer``: turns a matched route chain (or the not-found and
  error fallbacks) into body markup.
- ``compose``: wraps a render outcome in the document shell.
"""

from wren.templating.document import compose
from wren.templating.integration import create_environment
from wren.templating.views import ViewRenderer, ViewTree

__all__ = ["ViewRenderer", "ViewTree", "compose", "create_environment"]
