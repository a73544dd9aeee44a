"""Tests for the API payload models."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from pbkit.shared.models import AuthRecord, AuthResponse, ListResult, RecordModel, ResponseError


class TestRecordModel:
    def test_system_fields_and_extras(self) -> None:
        record = RecordModel.model_validate(
            {"id": "abc", "collectionId": "c1", "collectionName": "articles", "price": 9.5}
        )
        assert record.collection_id == "c1"
        assert record.collection_name == "articles"
        assert record.model_extra == {"price": 9.5}

    def test_dump_by_alias_keeps_extras(self) -> None:
        record = RecordModel.model_validate({"id": "abc", "collectionName": "articles", "public": True})
        dumped = record.model_dump(by_alias=True)
        assert dumped["collectionName"] == "articles"
        assert dumped["public"] is True

    def test_frozen(self) -> None:
        record = RecordModel(id="abc")
        with pytest.raises(ValidationError):
            record.id = "other"  # type: ignore[misc]


class TestAuthResponse:
    def test_parses_record(self, user_record: dict[str, Any]) -> None:
        response = AuthResponse.model_validate({"token": "t", "record": user_record})
        assert isinstance(response.record, AuthRecord)
        assert response.record.email == "alice@example.com"
        assert response.record.email_visibility is True
        assert response.record.model_extra == {"avatar": ""}

    def test_requires_token(self, user_record: dict[str, Any]) -> None:
        with pytest.raises(ValidationError):
            AuthResponse.model_validate({"record": user_record})


class TestListResult:
    def test_camel_case_fields(self) -> None:
        result = ListResult.model_validate(
            {"items": [{"id": "1"}], "page": 2, "perPage": 30, "totalItems": 31, "totalPages": 2}
        )
        assert result.per_page == 30
        assert result.total_items == 31
        assert result.total_pages == 2

    def test_skipped_totals(self) -> None:
        result = ListResult.model_validate({"items": [], "page": 1, "perPage": 30, "totalItems": -1, "totalPages": -1})
        assert result.total_items == -1


class TestResponseError:
    def test_defaults(self) -> None:
        err = ResponseError.model_validate({"status": 404})
        assert err.message == ""
        assert err.data == {}
