"""Payload validation for resolver create / update requests.

Pure functions: the request body is reduced to a closed set of known
fields before any business logic sees it. Unknown keys are dropped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypedDict

_OCTET = r"(25[0-5]|2[0-4]\d|1\d\d|[1-9]?\d)"
IPV4_RE = re.compile(rf"^{_OCTET}(\.{_OCTET}){{3}}$")

UPDATABLE_FIELDS = ("provider", "hostname", "alias", "ipv4")

MISSING_FIELDS_MESSAGE = (
    "At least one updatable field (provider, hostname, alias, ipv4) is required"
)


class PayloadMode(str, Enum):
    CREATE = "create"
    UPDATE = "update"


class ResolverFields(TypedDict, total=False):
    provider: str
    hostname: str
    alias: str
    ipv4: str


@dataclass
class ValidationResult:
    fields: ResolverFields = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def is_valid_ipv4(value: str) -> bool:
    return bool(IPV4_RE.match(value))


def _trimmed(value: Any) -> str:
    # Non-string values are treated as empty strings
    return value.strip() if isinstance(value, str) else ""


def _required_text(
    body: dict[str, Any], name: str, required: bool, result: ValidationResult
) -> None:
    if name in body:
        value = _trimmed(body[name])
        if not value:
            result.errors.append(f"{name} cannot be empty")
        else:
            result.fields[name] = value
    elif required:
        result.errors.append(f"{name} is required")


def validate_resolver_payload(
    body: dict[str, Any], mode: PayloadMode | str = PayloadMode.CREATE
) -> ValidationResult:
    """Normalize *body* and collect every applicable error message.

    In create mode ``provider`` and ``hostname`` are required. In update mode
    any subset is accepted but at least one recognized field must be present.
    """
    mode = PayloadMode(mode)
    creating = mode is PayloadMode.CREATE
    result = ValidationResult()

    _required_text(body, "provider", creating, result)
    _required_text(body, "hostname", creating, result)

    if "alias" in body:
        result.fields["alias"] = _trimmed(body["alias"])

    if "ipv4" in body:
        ipv4 = _trimmed(body["ipv4"])
        if ipv4 and not is_valid_ipv4(ipv4):
            result.errors.append("ipv4 must be a valid IPv4 address")
        else:
            result.fields["ipv4"] = ipv4

    if mode is PayloadMode.UPDATE and not result.fields:
        result.errors.append(MISSING_FIELDS_MESSAGE)

    return result
