"""Hierarchical exception types for pbkit."""

from __future__ import annotations

from typing import Any


class PbkitError(Exception):
    """Base exception for all pbkit errors."""


# ── REST client ────────────────────────────────────────────────


class ApiError(PbkitError):
    """The PocketBase server answered with an error status."""

    def __init__(self, status: int, message: str, data: dict[str, Any] | None = None) -> None:
        super().__init__(f"HTTP error {status}: {message}")
        self.status = status
        self.message = message
        self.data = data or {}


class TransportError(PbkitError):
    """The request never produced an HTTP response."""


class InvalidTokenError(PbkitError):
    """The stored auth token is missing or is not a decodable JWT."""


# ── Operations ─────────────────────────────────────────────────


class BootstrapError(PbkitError):
    """Container entrypoint could not prepare the server."""


class SeedError(PbkitError):
    """Demo data does not match the server or could not be inserted."""
