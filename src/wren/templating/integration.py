"""Build the Jinja2 environment an App renders with.

Templates are looked up in the app's ``template_dir`` first and then in
the templates shipped with wren, so an app can replace the document
shell and the 404 and error pages by adding files of the same name.
"""

from collections.abc import Callable
from typing import Any

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader

from wren.config import AppConfig


def create_environment(
    config: AppConfig,
    filters: dict[str, Callable[..., Any]],
    globals_: dict[str, Any],
) -> Environment:
    """Return the environment shared by every request of a frozen app.

    Filters and globals registered on the App win over Jinja2's own.
    """
    env = Environment(
        loader=ChoiceLoader(
            [
                FileSystemLoader(str(config.template_dir)),
                PackageLoader("wren.templating", "templates"),
            ]
        ),
        autoescape=config.autoescape,
        auto_reload=config.debug,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
    )
    env.filters.update(filters)
    env.globals.update(lang=config.lang, debug=config.debug, **globals_)
    return env
