"""In-memory store for the token and record of the authenticated user."""

from __future__ import annotations

import json
import logging
import time
from datetime import datetime, timezone
from typing import Any

from jose import JWTError, jwt
from pydantic import ValidationError

from pbkit.shared.cookies import parse_cookie, serialize_cookie
from pbkit.shared.exceptions import InvalidTokenError
from pbkit.shared.models import AuthRecord

logger = logging.getLogger(__name__)

SUPERUSERS_COLLECTION = "_superusers"
DEFAULT_COOKIE_KEY = "pb_auth"


class AuthStore:
    """Token + auth record shared by every service of a ``PocketBase`` client."""

    def __init__(self) -> None:
        self._token: str | None = None
        self._record: AuthRecord | None = None

    @property
    def token(self) -> str | None:
        return self._token

    @property
    def record(self) -> AuthRecord | None:
        return self._record

    @property
    def record_id(self) -> str | None:
        return self._record.id if self._record else None

    @property
    def collection_id(self) -> str | None:
        return (self._record.collection_id or None) if self._record else None

    @property
    def collection_name(self) -> str | None:
        return (self._record.collection_name or None) if self._record else None

    @property
    def is_valid(self) -> bool:
        """Whether a complete, unexpired auth state is stored."""
        if not (self._token and self._record and self.collection_id and self.collection_name):
            return False
        try:
            claims = self.token_payload()
        except InvalidTokenError:
            return False
        exp = claims.get("exp")
        if exp is None:
            return True
        try:
            return float(exp) > time.time()
        except (TypeError, ValueError):
            return False

    @property
    def is_superuser(self) -> bool:
        return self.is_valid and self.collection_name == SUPERUSERS_COLLECTION

    def save(self, token: str, record: AuthRecord) -> None:
        self._token = token
        self._record = record
        logger.debug("auth store saved record %s (%s)", record.id, record.collection_name)

    def set_record(self, record: AuthRecord) -> None:
        self._record = record

    def clear(self) -> None:
        self._token = None
        self._record = None

    def token_payload(self) -> dict[str, Any]:
        """Return the JWT claims of the stored token without verifying its signature.

        Raises:
            InvalidTokenError: If no token is stored or it is not a JWT.
        """
        if not self._token:
            raise InvalidTokenError("no token stored")
        try:
            return jwt.get_unverified_claims(self._token)
        except JWTError as exc:
            raise InvalidTokenError("Invalid token") from exc

    def load_from_cookie(self, raw: str, *, key: str = DEFAULT_COOKIE_KEY) -> None:
        """Restore the auth state from a cookie header holding ``{"token", "record"}``.

        An absent or unreadable entry clears the store.
        """
        value = parse_cookie(raw).get(key, "")
        try:
            data = json.loads(value) if value else {}
        except json.JSONDecodeError:
            data = {}

        token = data.get("token") if isinstance(data, dict) else None
        record_data = data.get("record") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token or not isinstance(record_data, dict):
            self.clear()
            return

        try:
            record = AuthRecord.model_validate(record_data)
        except ValidationError:
            logger.warning("auth cookie %r holds an invalid record; clearing auth store", key)
            self.clear()
            return

        self.save(token, record)

    def export_to_cookie(self, *, key: str = DEFAULT_COOKIE_KEY, **attributes: Any) -> str:
        """Serialize the auth state into a ``Set-Cookie`` header value.

        ``attributes`` are forwarded to ``serialize_cookie``; ``expires``
        defaults to the token's ``exp`` claim when it has one.
        """
        payload = {
            "token": self._token or "",
            "record": self._record.model_dump(by_alias=True) if self._record else None,
        }

        if "expires" not in attributes and self._token:
            try:
                exp = self.token_payload().get("exp")
            except InvalidTokenError:
                exp = None
            if isinstance(exp, (int, float)) and not isinstance(exp, bool):
                try:
                    attributes["expires"] = datetime.fromtimestamp(exp, tz=timezone.utc)
                except (OverflowError, OSError, ValueError):
                    logger.warning("token exp %r is out of range; exporting cookie without Expires", exp)

        return serialize_cookie(key, json.dumps(payload, separators=(",", ":")), **attributes)
