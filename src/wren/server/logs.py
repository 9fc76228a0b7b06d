"""Logging setup for ``wren run``.

Library code only ever calls ``logging.getLogger("wren.<area>")``; this
module attaches one console handler to the ``wren`` logger with either a
human-readable or a one-JSON-object-per-line formatter.
"""

import json
import logging
import sys

_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """One JSON object per record, for log shippers."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, _DATE_FORMAT),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(level: str = "info", fmt: str = "text") -> logging.Logger:
    """Install a console handler on the ``wren`` logger.

    Safe to call more than once: the previous handler is replaced.

    Args:
        level: Level name (``"debug"``, ``"info"``, ...).
        fmt: ``"text"`` or ``"json"``.
    """
    if fmt not in ("text", "json"):
        msg = f"Unknown log format {fmt!r}; expected 'text' or 'json'."
        raise ValueError(msg)

    logger = logging.getLogger("wren")
    logger.setLevel(level.upper())

    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(fmt=_TEXT_FORMAT, datefmt=_DATE_FORMAT))

    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)

    # Avoid duplicate lines through the root logger
    logger.propagate = False
    return logger
