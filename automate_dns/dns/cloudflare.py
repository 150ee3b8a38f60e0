"""Thin async client for the Cloudflare v4 DNS records API (A-records only)."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import httpx

# Cloudflare's "automatic" TTL sentinel
AUTO_TTL = 1


class DnsSyncError(Exception):
    """Cloudflare rejected or failed a DNS call."""


@dataclass
class DnsRecord:
    id: str
    name: str
    content: str
    type: str = "A"
    ttl: int = AUTO_TTL
    proxied: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "DnsRecord":
        """Build a record from one item of a lookup result.

        Raises KeyError, TypeError or ValueError when the item is malformed.
        """
        if not isinstance(data, dict):
            raise TypeError(f"expected a DNS record object, got {type(data).__name__}")
        ttl = data.get("ttl")
        proxied = data.get("proxied")
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            content=data.get("content", ""),
            type=data.get("type", "A"),
            ttl=AUTO_TTL if ttl is None else int(ttl),
            proxied=False if proxied is None else bool(proxied),
        )


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _is_envelope(payload: Any) -> bool:
    return isinstance(payload, dict) and "success" in payload


def extract_errors(payload: Any) -> str:
    """Join the provider's error messages with ``; `` (empty when there are none)."""
    if not _is_envelope(payload) or not payload.get("errors"):
        return ""
    messages = []
    for err in payload["errors"]:
        if isinstance(err, dict) and err.get("message"):
            messages.append(str(err["message"]))
        else:
            messages.append(json.dumps(err))
    return "; ".join(messages)


def _succeeded(response: httpx.Response, payload: Any) -> bool:
    if not response.is_success:
        return False
    return not (_is_envelope(payload) and payload["success"] is False)


def _failure(action: str, hostname: str, payload: Any = None, detail: str = "") -> DnsSyncError:
    message = detail or extract_errors(payload)
    suffix = f": {message}" if message else ""
    return DnsSyncError(f"Failed to {action} DNS record for {hostname}{suffix}")


class CloudflareClient:
    """Look up, create and update A-records in one Cloudflare zone."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        zone_id: str,
    ) -> None:
        self.http = http
        self.zone_id = zone_id

    @property
    def records_path(self) -> str:
        return f"/zones/{self.zone_id}/dns_records"

    async def _send(
        self, action: str, hostname: str, method: str, url: str, **kwargs: Any
    ) -> Any:
        try:
            response = await self.http.request(method, url, **kwargs)
        except httpx.HTTPError as exc:
            raise _failure(action, hostname, detail=str(exc) or exc.__class__.__name__) from exc

        payload = _decode(response)
        if not _succeeded(response, payload):
            raise _failure(action, hostname, payload)
        return payload

    async def find_a_record(self, hostname: str) -> DnsRecord | None:
        """Return the first A-record named exactly *hostname*, if any."""
        payload = await self._send(
            "fetch",
            hostname,
            "GET",
            self.records_path,
            params={"type": "A", "name": hostname},
        )
        if _is_envelope(payload) and isinstance(payload.get("result"), list) and payload["result"]:
            try:
                return DnsRecord.from_api(payload["result"][0])
            except (KeyError, TypeError, ValueError) as exc:
                raise _failure(
                    "fetch", hostname, detail=f"unexpected record in lookup result ({exc!r})"
                ) from exc
        return None

    async def create_a_record(self, hostname: str, ipv4: str) -> None:
        body = {
            "type": "A",
            "name": hostname,
            "content": ipv4,
            "ttl": AUTO_TTL,
            "proxied": False,
        }
        await self._send("create", hostname, "POST", self.records_path, json=body)

    async def update_a_record(self, hostname: str, record: DnsRecord, ipv4: str) -> None:
        """Point *record* at *ipv4*, keeping its TTL and proxy flag."""
        body = {
            "type": "A",
            "name": hostname,
            "content": ipv4,
            "ttl": record.ttl,
            "proxied": record.proxied,
        }
        await self._send(
            "update", hostname, "PUT", f"{self.records_path}/{record.id}", json=body
        )
