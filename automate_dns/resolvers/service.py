"""Resolver orchestration: validation → store → DNS sync.

DNS sync always runs after the store has committed. A sync failure is
reported to the caller but never rolls the local write back.
"""

from __future__ import annotations

from typing import Any

from automate_dns.core.errors import NotFoundError, SyncFailureError, ValidationFailedError
from automate_dns.core.logging import get_logger
from automate_dns.dns.cloudflare import DnsSyncError
from automate_dns.dns.reconciler import DnsReconciler
from automate_dns.models.resolver import Resolver
from automate_dns.resolvers.store import ResolverStore
from automate_dns.resolvers.validation import (
    PayloadMode,
    ResolverFields,
    validate_resolver_payload,
)

logger = get_logger(__name__)

GONE_MESSAGE = "Resolver not found or already deleted"


class ResolverService:
    def __init__(self, store: ResolverStore, dns: DnsReconciler) -> None:
        self.store = store
        self.dns = dns

    def _validated(self, body: dict[str, Any], mode: PayloadMode) -> ResolverFields:
        result = validate_resolver_payload(body, mode)
        if not result.ok:
            raise ValidationFailedError(errors=result.errors)
        return result.fields

    async def _sync(self, resolver: Resolver, failure_message: str) -> None:
        try:
            await self.dns.reconcile(resolver.hostname, resolver.ipv4)
        except DnsSyncError as exc:
            logger.error(
                failure_message,
                resolver_id=resolver.id,
                hostname=resolver.hostname,
                ipv4=resolver.ipv4,
                error=str(exc),
            )
            raise SyncFailureError(failure_message, errors=[str(exc)]) from exc

    async def list_resolvers(
        self,
        *,
        provider: str | None = None,
        hostname: str | None = None,
        include_deleted: bool = False,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Resolver]:
        return await self.store.list(
            provider=provider,
            hostname=hostname,
            include_deleted=include_deleted,
            limit=limit,
            offset=offset,
        )

    async def get_resolver(self, resolver_id: int, *, include_deleted: bool = False) -> Resolver:
        resolver = await self.store.get_by_id(resolver_id, include_deleted=include_deleted)
        if resolver is None:
            raise NotFoundError("Resolver not found")
        return resolver

    async def create_resolver(self, body: dict[str, Any]) -> Resolver:
        fields = self._validated(body, PayloadMode.CREATE)
        created = await self.store.insert(fields)
        logger.info(
            "Resolver created",
            resolver_id=created.id,
            provider=created.provider,
            hostname=created.hostname,
        )

        if created.ipv4:
            await self._sync(created, "Resolver created but DNS sync failed")
        return created

    async def update_resolver(self, resolver_id: int, body: dict[str, Any]) -> Resolver:
        fields = self._validated(body, PayloadMode.UPDATE)

        current = await self.store.get_by_id(resolver_id)
        if current is None:
            raise NotFoundError(GONE_MESSAGE)
        # The store refreshes the same identity in place, read it first
        previous_ipv4 = current.ipv4

        updated = await self.store.update_by_id(resolver_id, fields)
        if updated is None:
            raise NotFoundError(GONE_MESSAGE)
        logger.info("Resolver updated", resolver_id=resolver_id, fields=sorted(fields))

        ipv4_changed = "ipv4" in fields and fields["ipv4"] != previous_ipv4
        if ipv4_changed and updated.ipv4:
            await self._sync(updated, "Resolver updated but DNS sync failed")
        return updated

    async def delete_resolver(self, resolver_id: int) -> Resolver:
        """Soft delete. The provider's A-record is left untouched."""
        deleted = await self.store.soft_delete_by_id(resolver_id)
        if deleted is None:
            raise NotFoundError(GONE_MESSAGE)
        logger.info("Resolver soft-deleted", resolver_id=resolver_id)
        return deleted
