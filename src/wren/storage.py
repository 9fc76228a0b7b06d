"""Per-request key/value storage backed by a signed cookie.

Values are serialized as JSON and signed with ``itsdangerous``; they are
readable by the client but cannot be forged. Changes are written back as
a ``Set-Cookie`` on the response when the pipeline finishes.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from itsdangerous import BadSignature, URLSafeTimedSerializer

from wren.errors import ConfigurationError
from wren.http.request import Request
from wren.http.response import Response

logger = logging.getLogger("wren.storage")


@dataclass(frozen=True, slots=True)
class StorageConfig:
    """Storage cookie configuration.

    ``secret_key`` is required — storage is signed, not encrypted.
    """

    secret_key: str
    cookie_name: str = "wren_storage"
    max_age: int = 30 * 86400  # 30 days
    path: str = "/"
    domain: str | None = None
    secure: bool = False
    httponly: bool = True
    samesite: str = "lax"


class Storage:
    """Signed-cookie storage for one request.

    Usage::

        storage = Storage(request, config)
        token = storage.get("token")
        storage.set("token", "abc")
        response = storage.apply(response)   # adds Set-Cookie if changed
    """

    __slots__ = ("_config", "_data", "_dirty", "_serializer")

    def __init__(self, request: Request, config: StorageConfig) -> None:
        if not config.secret_key:
            msg = "StorageConfig.secret_key must not be empty."
            raise ConfigurationError(msg)
        self._config = config
        self._serializer = URLSafeTimedSerializer(config.secret_key, salt="wren.storage")
        self._data: dict[str, Any] = self._load(request)
        self._dirty = False

    def _load(self, request: Request) -> dict[str, Any]:
        """Deserialize and verify the storage cookie."""
        cookie_value = request.cookies.get(self._config.cookie_name)
        if not cookie_value:
            return {}
        try:
            data = self._serializer.loads(cookie_value, max_age=self._config.max_age)
        except BadSignature:
            logger.debug("Discarding storage cookie with a bad or expired signature")
            return {}
        if not isinstance(data, dict):
            return {}
        return data

    # -- Mapping-style access --

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._dirty = True

    def remove(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._dirty = True

    def clear(self) -> None:
        if self._data:
            self._data.clear()
            self._dirty = True

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    @property
    def dirty(self) -> bool:
        """Whether anything was written during this request."""
        return self._dirty

    # -- Response side --

    def apply(self, response: Response) -> Response:
        """Attach the storage cookie to *response* if anything changed.

        Cleared storage deletes the cookie instead of writing an empty one.
        """
        if not self._dirty:
            return response
        cfg = self._config
        if not self._data:
            return response.without_cookie(cfg.cookie_name, path=cfg.path)
        return response.with_cookie(
            name=cfg.cookie_name,
            value=self._serializer.dumps(self._data),
            max_age=cfg.max_age,
            path=cfg.path,
            domain=cfg.domain,
            secure=cfg.secure,
            httponly=cfg.httponly,
            samesite=cfg.samesite,
        )
