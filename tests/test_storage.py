"""Tests for wren.storage — signed-cookie key/value storage."""

import pytest
from itsdangerous import URLSafeTimedSerializer

from conftest import SECRET, make_request
from wren.errors import ConfigurationError
from wren.http.response import Response
from wren.storage import Storage, StorageConfig

CONFIG = StorageConfig(secret_key=SECRET)


def signed(data: object, secret: str = SECRET) -> str:
    return URLSafeTimedSerializer(secret, salt="wren.storage").dumps(data)


class TestStorageLoad:
    def test_empty_without_cookie(self) -> None:
        storage = Storage(make_request(), CONFIG)
        assert len(storage) == 0
        assert storage.get("token") is None

    def test_reads_signed_cookie(self) -> None:
        request = make_request(cookies=f"wren_storage={signed({'token': 'abc'})}")
        storage = Storage(request, CONFIG)
        assert storage.get("token") == "abc"
        assert "token" in storage
        assert list(storage) == ["token"]

    def test_tampered_cookie_discarded(self) -> None:
        request = make_request(cookies=f"wren_storage={signed({'token': 'abc'}, 'other-key')}")
        assert len(Storage(request, CONFIG)) == 0

    def test_non_dict_payload_discarded(self) -> None:
        request = make_request(cookies=f"wren_storage={signed(['not', 'a', 'dict'])}")
        assert len(Storage(request, CONFIG)) == 0

    def test_secret_required(self) -> None:
        with pytest.raises(ConfigurationError):
            Storage(make_request(), StorageConfig(secret_key=""))


class TestStorageWrite:
    def test_untouched_storage_sets_no_cookie(self) -> None:
        storage = Storage(make_request(), CONFIG)
        storage.get("token")
        assert not storage.dirty
        assert storage.apply(Response()).cookies == ()

    def test_set_writes_cookie(self) -> None:
        storage = Storage(make_request(), CONFIG)
        storage.set("token", "abc")
        response = storage.apply(Response())

        (cookie,) = response.cookies
        assert cookie.name == "wren_storage"
        assert cookie.max_age == CONFIG.max_age
        assert cookie.httponly
        serializer = URLSafeTimedSerializer(SECRET, salt="wren.storage")
        assert serializer.loads(cookie.value) == {"token": "abc"}

    def test_remove_missing_key_is_not_a_change(self) -> None:
        storage = Storage(make_request(), CONFIG)
        storage.remove("token")
        assert not storage.dirty

    def test_clear_deletes_cookie(self) -> None:
        request = make_request(cookies=f"wren_storage={signed({'token': 'abc'})}")
        storage = Storage(request, CONFIG)
        storage.clear()
        (cookie,) = storage.apply(Response()).cookies
        assert cookie.value == ""
        assert cookie.max_age == 0

    def test_cookie_settings_applied(self) -> None:
        config = StorageConfig(secret_key=SECRET, cookie_name="s", secure=True, samesite="strict")
        storage = Storage(make_request(), config)
        storage.set("a", 1)
        (cookie,) = storage.apply(Response()).cookies
        assert cookie.name == "s"
        assert cookie.secure
        assert cookie.samesite == "strict"
