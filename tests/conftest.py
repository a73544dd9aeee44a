"""Shared pytest fixtures for the pbkit test suite."""

from __future__ import annotations

import time
from collections.abc import AsyncIterator, Callable
from typing import Any

import pytest
from jose import jwt

from pbkit.client.pocketbase import PocketBase
from pbkit.config import Settings

BASE_URL = "http://pb:8090"


@pytest.fixture()
def settings() -> Settings:
    """Return a Settings instance with test defaults."""
    return Settings(
        email="admin@example.com",
        password="s3cret-pass",
        binary="/usr/local/bin/pocketbase",
        data_dir="/pb_data",
        http_addr="0.0.0.0:8090",
        url=BASE_URL,
    )


@pytest.fixture()
async def pb() -> AsyncIterator[PocketBase]:
    client = PocketBase(f"{BASE_URL}/", timeout=5)
    yield client
    await client.aclose()


@pytest.fixture()
def make_token() -> Callable[..., str]:
    """Build HS256 tokens; ``expires_in`` is relative to now and may be negative."""

    def _make(expires_in: int | None = 3600, **claims: Any) -> str:
        if expires_in is not None:
            claims["exp"] = int(time.time()) + expires_in
        return jwt.encode(claims, "test-secret", algorithm="HS256")

    return _make


@pytest.fixture()
def superuser_record() -> dict[str, Any]:
    return {
        "id": "su0000000000001",
        "collectionId": "pbc_3142635823",
        "collectionName": "_superusers",
        "email": "admin@example.com",
        "emailVisibility": False,
        "verified": True,
        "created": "2025-01-01 00:00:00.000Z",
        "updated": "2025-01-01 00:00:00.000Z",
    }


@pytest.fixture()
def user_record() -> dict[str, Any]:
    return {
        "id": "u1demo0000000a1",
        "collectionId": "_pb_users_auth_",
        "collectionName": "users",
        "email": "alice@example.com",
        "emailVisibility": True,
        "verified": True,
        "name": "Alice",
        "avatar": "",
        "created": "2025-01-10 09:00:00.000Z",
        "updated": "2025-01-10 09:00:00.000Z",
    }
