"""Path parameter patterns and type conversion.

Built-in converters for route path segments like ``{id:int}``.
"""

import re
from typing import Any

# (regex_pattern, python_type) for each supported converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
    "path": (r".+", str),
}

_COMPILED: dict[str, re.Pattern[str]] = {
    name: re.compile(pattern) for name, (pattern, _) in CONVERTERS.items()
}


def matches(value: str, param_type: str) -> bool:
    """Whether a single path segment satisfies the converter pattern."""
    return _COMPILED[param_type].fullmatch(value) is not None


def convert(value: str, param_type: str) -> Any:
    """Convert a matched segment to the converter's Python type."""
    return CONVERTERS[param_type][1](value)
