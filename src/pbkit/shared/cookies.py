"""Cookie parsing and serialization helpers.

``parse_cookie`` decodes ``k=v; k2=v2`` header strings the permissive way
browsers and the PocketBase SDKs do. It never raises and keeps the first
occurrence of a key; malformed percent-escapes leave the value as sent.

This module intentionally avoids logging cookie values.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from email.utils import format_datetime
from urllib.parse import quote, unquote

from pydantic import BaseModel

_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
# RFC 6265 cookie-name token.
_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")
_SAME_SITE = {"strict": "Strict", "lax": "Lax", "none": "None"}
# Characters ``encodeURIComponent`` leaves alone besides alphanumerics and ``-_.``.
_URI_COMPONENT_SAFE = "!~*'()"


def parse_cookie(raw: object) -> dict[str, str]:
    """Parse a cookie header string into a ``{name: value}`` dict.

    Anything that is not a ``str`` yields an empty dict. Fragments without an
    ``=`` are skipped; a ``;`` found before the next ``=`` means the scan
    resumes right after the last ``;`` preceding that ``=``.
    """
    cookies: dict[str, str] = {}
    if not isinstance(raw, str):
        return cookies

    index = 0
    length = len(raw)
    while index < length:
        eq_idx = raw.find("=", index)
        if eq_idx == -1:
            break

        end_idx = raw.find(";", index)
        if end_idx == -1:
            end_idx = length
        elif end_idx < eq_idx:
            index = raw.rfind(";", 0, eq_idx) + 1
            continue

        key = raw[index:eq_idx].strip()
        if key not in cookies:
            value = raw[eq_idx + 1 : end_idx].strip()
            if value.startswith('"'):
                value = value[1:-1]
            cookies[key] = _decode(value)

        index = end_idx + 1

    return cookies


def _decode(value: str) -> str:
    """Percent-decode ``value``, returning it untouched when an escape is malformed."""
    if "%" not in value:
        return value
    if _ESCAPE_RE.search(value):
        return value
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError:
        return value


def serialize_cookie(
    name: str,
    value: str,
    *,
    path: str | None = "/",
    expires: datetime | None = None,
    http_only: bool = True,
    secure: bool = True,
    same_site: str | None = "Strict",
) -> str:
    """Build a ``Set-Cookie`` header value; the value is percent-encoded.

    Raises:
        ValueError: If ``name``, ``path`` or ``same_site`` is not acceptable.
    """
    if not _TOKEN_RE.match(name):
        raise ValueError(f"invalid cookie name: {name!r}")

    parts = [f"{name}={quote(value, safe=_URI_COMPONENT_SAFE)}"]

    if path:
        if ";" in path or any(ord(ch) < 0x20 for ch in path):
            raise ValueError(f"invalid cookie path: {path!r}")
        parts.append(f"Path={path}")

    if expires is not None:
        if expires.tzinfo is None:
            expires = expires.replace(tzinfo=timezone.utc)
        parts.append(f"Expires={format_datetime(expires.astimezone(timezone.utc), usegmt=True)}")

    if http_only:
        parts.append("HttpOnly")
    if secure:
        parts.append("Secure")

    if same_site:
        canonical = _SAME_SITE.get(same_site.lower())
        if canonical is None:
            raise ValueError(f"invalid SameSite value: {same_site!r}")
        parts.append(f"SameSite={canonical}")

    return "; ".join(parts)


class AuthCookie(BaseModel):
    """A single ``Set-Cookie`` entry carrying an auth payload."""

    model_config = {"frozen": True}

    name: str | None = None
    value: str | None = None
    path: str | None = None
    expires: str | None = None
    same_site: str | None = None
    http_only: bool = False
    secure: bool = False

    @classmethod
    def from_header(cls, raw: str, *, key: str = "pb_auth") -> AuthCookie:
        """Build from a ``Set-Cookie`` string such as ``pb_auth=...; Path=/; HttpOnly``."""
        cookies = parse_cookie(raw)

        attributes: dict[str, str] = {}
        for name, value in cookies.items():
            attributes.setdefault(name.lower(), value)

        flags: set[str] = set()
        if isinstance(raw, str):
            flags = {part.strip().lower() for part in raw.split(";") if "=" not in part}

        value = cookies.get(key)
        return cls(
            name=key if value else None,
            value=value,
            path=attributes.get("path"),
            expires=attributes.get("expires"),
            same_site=attributes.get("samesite"),
            http_only="httponly" in flags,
            secure="secure" in flags,
        )
