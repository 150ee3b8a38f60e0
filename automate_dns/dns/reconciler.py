"""Make the provider's A-record for a hostname match the locally stored IPv4."""

from __future__ import annotations

from enum import Enum

import httpx

from automate_dns.core.config import Settings
from automate_dns.core.logging import get_logger
from automate_dns.dns.cloudflare import CloudflareClient

logger = get_logger(__name__)


class SyncOutcome(str, Enum):
    NOTHING_TO_SYNC = "nothing_to_sync"
    SKIPPED = "skipped"
    UNCHANGED = "unchanged"
    CREATED = "created"
    UPDATED = "updated"


class DnsReconciler:
    """Best-effort A-record sync; disabled when credentials are missing.

    The call is blocking for the caller and never retried. ``timeout=None``
    waits on the provider indefinitely.
    """

    def __init__(
        self,
        api_token: str = "",
        zone_id: str = "",
        *,
        base_url: str = "https://api.cloudflare.com/client/v4",
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_token = api_token
        self.zone_id = zone_id
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> "DnsReconciler":
        return cls(
            settings.cloudflare_api_token,
            settings.cloudflare_zone_id,
            base_url=settings.cloudflare_api_url,
            timeout=settings.dns_sync_timeout,
            transport=transport,
        )

    @property
    def enabled(self) -> bool:
        return bool(self.api_token and self.zone_id)

    def _http_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {self.api_token}",
                "Content-Type": "application/json",
            },
            timeout=self.timeout,
            transport=self._transport,
        )

    async def reconcile(self, hostname: str, ipv4: str) -> SyncOutcome:
        """Ensure the A-record for *hostname* points at *ipv4*.

        Raises:
            DnsSyncError: the lookup or the write failed.
        """
        if not ipv4:
            return SyncOutcome.NOTHING_TO_SYNC

        if not self.enabled:
            logger.warning(
                "Skipping DNS sync: CLOUDFLARE_API_TOKEN or CLOUDFLARE_ZONE_ID is not set",
                hostname=hostname,
            )
            return SyncOutcome.SKIPPED

        async with self._http_client() as http:
            client = CloudflareClient(http, self.zone_id)
            existing = await client.find_a_record(hostname)

            if existing is not None and existing.content == ipv4:
                logger.debug("DNS record already up to date", hostname=hostname, ipv4=ipv4)
                return SyncOutcome.UNCHANGED

            if existing is None:
                await client.create_a_record(hostname, ipv4)
                outcome = SyncOutcome.CREATED
            else:
                await client.update_a_record(hostname, existing, ipv4)
                outcome = SyncOutcome.UPDATED

        logger.info("DNS record synced", hostname=hostname, ipv4=ipv4, outcome=outcome.value)
        return outcome
