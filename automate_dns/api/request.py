"""Request parsing helpers: JSON bodies, query strings and path ids."""

from __future__ import annotations

import json
import math
import re
from typing import Any

from fastapi import Request

from automate_dns.core.errors import MalformedRequestError
from automate_dns.resolvers.store import DEFAULT_LIMIT, MAX_INT64, MAX_LIMIT

_TRUTHY = {"1", "true", "yes", "on"}
_ID_RE = re.compile(r"^\s*\d+\s*$")


async def read_json_body(request: Request) -> dict[str, Any]:
    """Return the request body as a JSON object or raise MalformedRequestError."""
    raw = await request.body()
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        raise MalformedRequestError("Invalid JSON payload")

    if not text.strip():
        raise MalformedRequestError("Request body is required")

    try:
        data = json.loads(text)
    except ValueError:
        raise MalformedRequestError("Invalid JSON payload")

    if not isinstance(data, dict):
        raise MalformedRequestError("Body must be a JSON object")
    return data


def parse_boolean(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in _TRUTHY


def optional_string(value: str | None) -> str | None:
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None


def _to_number(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def parse_limit(value: str | None, fallback: int = DEFAULT_LIMIT, maximum: int = MAX_LIMIT) -> int:
    number = _to_number(value)
    if number is None or number <= 0:
        return fallback
    return max(1, min(math.floor(number), maximum))


def parse_offset(value: str | None) -> int:
    number = _to_number(value)
    if number is None or number < 0:
        return 0
    return min(math.floor(number), MAX_INT64)


def parse_resolver_id(value: str | None) -> int:
    """Parse a positive integer id from a path segment."""
    if value is None or not _ID_RE.match(value) or int(value) < 1:
        raise MalformedRequestError("Resolver id must be a positive integer")
    return int(value)
