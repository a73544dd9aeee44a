"""Tests for AuthStore."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from pbkit.client.auth_store import AuthStore
from pbkit.shared.cookies import AuthCookie
from pbkit.shared.exceptions import InvalidTokenError
from pbkit.shared.models import AuthRecord


@pytest.fixture
def store() -> AuthStore:
    return AuthStore()


class TestAuthStoreState:
    def test_empty(self, store: AuthStore) -> None:
        assert store.token is None
        assert store.record is None
        assert store.collection_id is None
        assert store.collection_name is None
        assert store.is_valid is False
        assert store.is_superuser is False

    def test_superuser(
        self, store: AuthStore, make_token: Callable[..., str], superuser_record: dict[str, Any]
    ) -> None:
        store.save(make_token(), AuthRecord.model_validate(superuser_record))
        assert store.is_valid is True
        assert store.is_superuser is True
        assert store.record_id == "su0000000000001"

    def test_regular_user_is_not_superuser(
        self, store: AuthStore, make_token: Callable[..., str], user_record: dict[str, Any]
    ) -> None:
        store.save(make_token(), AuthRecord.model_validate(user_record))
        assert store.is_valid is True
        assert store.is_superuser is False

    def test_expired_token_is_invalid(
        self, store: AuthStore, make_token: Callable[..., str], user_record: dict[str, Any]
    ) -> None:
        store.save(make_token(expires_in=-60), AuthRecord.model_validate(user_record))
        assert store.is_valid is False

    def test_token_without_exp_is_valid(
        self, store: AuthStore, make_token: Callable[..., str], user_record: dict[str, Any]
    ) -> None:
        store.save(make_token(expires_in=None, id="x"), AuthRecord.model_validate(user_record))
        assert store.is_valid is True

    def test_garbage_token_is_invalid(self, store: AuthStore, user_record: dict[str, Any]) -> None:
        store.save("not-a-jwt", AuthRecord.model_validate(user_record))
        assert store.is_valid is False

    def test_record_without_collection_is_invalid(self, store: AuthStore, make_token: Callable[..., str]) -> None:
        store.save(make_token(), AuthRecord(id="abc"))
        assert store.is_valid is False

    def test_clear(self, store: AuthStore, make_token: Callable[..., str], user_record: dict[str, Any]) -> None:
        store.save(make_token(), AuthRecord.model_validate(user_record))
        store.clear()
        assert store.token is None
        assert store.record is None


class TestTokenPayload:
    def test_claims(self, store: AuthStore, make_token: Callable[..., str], user_record: dict[str, Any]) -> None:
        store.save(make_token(type="auth"), AuthRecord.model_validate(user_record))
        claims = store.token_payload()
        assert claims["type"] == "auth"
        assert "exp" in claims

    def test_no_token(self, store: AuthStore) -> None:
        with pytest.raises(InvalidTokenError):
            store.token_payload()

    def test_undecodable_token(self, store: AuthStore, user_record: dict[str, Any]) -> None:
        store.save("a.b.c", AuthRecord.model_validate(user_record))
        with pytest.raises(InvalidTokenError, match="Invalid token"):
            store.token_payload()


class TestCookieRoundTrip:
    def test_export_then_load(
        self, store: AuthStore, make_token: Callable[..., str], user_record: dict[str, Any]
    ) -> None:
        token = make_token()
        store.save(token, AuthRecord.model_validate(user_record))

        header = store.export_to_cookie()
        cookie = AuthCookie.from_header(header)
        assert cookie.http_only is True
        assert cookie.secure is True
        assert cookie.expires is not None

        restored = AuthStore()
        restored.load_from_cookie(header)
        assert restored.token == token
        assert restored.record == store.record
        assert restored.collection_name == "users"

    def test_export_attributes_are_forwarded(
        self, store: AuthStore, make_token: Callable[..., str], user_record: dict[str, Any]
    ) -> None:
        store.save(make_token(), AuthRecord.model_validate(user_record))
        header = store.export_to_cookie(key="session", http_only=False, same_site="Lax")
        assert header.startswith("session=")
        assert "HttpOnly" not in header
        assert header.endswith("SameSite=Lax")

    def test_export_out_of_range_exp_omits_expires(
        self, store: AuthStore, make_token: Callable[..., str], user_record: dict[str, Any]
    ) -> None:
        store.save(make_token(expires_in=None, exp=10**20), AuthRecord.model_validate(user_record))
        assert store.is_valid is True

        header = store.export_to_cookie()

        assert "Expires" not in header
        assert AuthCookie.from_header(header).value is not None

    def test_export_boolean_exp_omits_expires(
        self, store: AuthStore, make_token: Callable[..., str], user_record: dict[str, Any]
    ) -> None:
        store.save(make_token(expires_in=None, exp=True), AuthRecord.model_validate(user_record))

        assert "Expires" not in store.export_to_cookie()

    def test_load_missing_key_clears(
        self, store: AuthStore, make_token: Callable[..., str], user_record: dict[str, Any]
    ) -> None:
        store.save(make_token(), AuthRecord.model_validate(user_record))
        store.load_from_cookie("other=1")
        assert store.token is None
        assert store.record is None

    @pytest.mark.parametrize(
        "raw",
        [
            "pb_auth=not-json",
            "pb_auth=%5B1%2C2%5D",
            'pb_auth={"token":"","record":{"id":"1"}}',
            'pb_auth={"token":"t","record":{"collectionName":"users"}}',
        ],
    )
    def test_load_unusable_payload_clears(self, store: AuthStore, raw: str) -> None:
        store.load_from_cookie(raw)
        assert store.token is None
        assert store.record is None
