"""Frozen Pydantic models for PocketBase API payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class RecordModel(BaseModel):
    """System fields present on every record; other fields are kept as extras."""

    model_config = {"frozen": True, "extra": "allow", "populate_by_name": True}

    id: str
    collection_id: str = Field(default="", alias="collectionId")
    collection_name: str = Field(default="", alias="collectionName")


class AuthRecord(RecordModel):
    """A record from an auth collection (``users``, ``_superusers``...)."""

    email: str | None = None
    verified: bool | None = None
    email_visibility: bool | None = Field(default=None, alias="emailVisibility")
    name: str | None = None
    created: str | None = None
    updated: str | None = None


class AuthResponse(BaseModel):
    """Body returned by ``auth-with-password`` and ``auth-refresh``."""

    model_config = {"frozen": True}

    token: str
    record: AuthRecord


class ListResult(BaseModel):
    """A page of records from ``/records``.

    ``total_items`` and ``total_pages`` are ``-1`` when ``skipTotal`` was set.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    items: list[dict[str, Any]] = Field(default_factory=list)
    page: int = 1
    per_page: int = Field(default=0, alias="perPage")
    total_items: int = Field(default=-1, alias="totalItems")
    total_pages: int = Field(default=-1, alias="totalPages")


class ResponseError(BaseModel):
    """Error body returned by PocketBase for non-2xx responses."""

    model_config = {"frozen": True}

    status: int
    message: str = ""
    data: dict[str, Any] = Field(default_factory=dict)
