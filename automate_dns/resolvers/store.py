"""Resolver persistence — CRUD over the ``resolvers`` table.

Mutating methods commit their own transaction so callers can run side
effects strictly after the write is durable.
"""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from automate_dns.core.errors import ConflictError
from automate_dns.core.logging import get_logger
from automate_dns.models.base import utcnow
from automate_dns.models.resolver import Resolver
from automate_dns.resolvers.validation import ResolverFields

logger = get_logger(__name__)

DEFAULT_LIMIT = 100
MAX_LIMIT = 500
# Largest value an INTEGER column or OFFSET clause accepts
MAX_INT64 = 2**63 - 1


def clamp_limit(limit: int | None) -> int:
    if not limit or limit <= 0:
        return DEFAULT_LIMIT
    return min(limit, MAX_LIMIT)


def clamp_offset(offset: int | None) -> int:
    if not offset or offset < 0:
        return 0
    return min(offset, MAX_INT64)


def _storable_id(resolver_id: int) -> bool:
    return 0 < resolver_id <= MAX_INT64


class ResolverStore:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list(
        self,
        *,
        provider: str | None = None,
        hostname: str | None = None,
        include_deleted: bool = False,
        limit: int | None = DEFAULT_LIMIT,
        offset: int | None = 0,
    ) -> list[Resolver]:
        """Return resolvers newest first, filtered by exact provider / hostname."""
        query = select(Resolver)
        if not include_deleted:
            query = query.where(Resolver.is_deleted.is_(False))
        if provider:
            query = query.where(Resolver.provider == provider)
        if hostname:
            query = query.where(Resolver.hostname == hostname)
        query = (
            query.order_by(Resolver.id.desc())
            .limit(clamp_limit(limit))
            .offset(clamp_offset(offset))
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, resolver_id: int, *, include_deleted: bool = False) -> Resolver | None:
        if not _storable_id(resolver_id):
            return None
        query = select(Resolver).where(Resolver.id == resolver_id)
        if not include_deleted:
            query = query.where(Resolver.is_deleted.is_(False))
        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def insert(self, fields: ResolverFields) -> Resolver:
        """Insert a live resolver; raises ConflictError on a duplicate pair."""
        now = utcnow()
        resolver = Resolver(
            provider=fields["provider"],
            hostname=fields["hostname"],
            alias=fields.get("alias", ""),
            ipv4=fields.get("ipv4", ""),
            is_deleted=False,
            ctime=now,
            mtime=now,
        )
        self.session.add(resolver)
        try:
            await self.session.flush()
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            logger.info(
                "Resolver insert rejected by unique index",
                provider=fields["provider"],
                hostname=fields["hostname"],
                error=str(exc.orig),
            )
            raise ConflictError(
                "A resolver with the same provider and hostname already exists"
            ) from exc
        return resolver

    async def update_by_id(self, resolver_id: int, fields: ResolverFields) -> Resolver | None:
        """Apply *fields* to a live resolver. Returns None when no live row matched."""
        if not _storable_id(resolver_id):
            return None
        stmt = (
            update(Resolver)
            .where(Resolver.id == resolver_id, Resolver.is_deleted.is_(False))
            .values(**fields, mtime=utcnow())
            .returning(Resolver)
        )
        try:
            result = await self.session.execute(stmt)
            resolver = result.scalar_one_or_none()
            await self.session.commit()
        except IntegrityError as exc:
            await self.session.rollback()
            logger.info(
                "Resolver update rejected by unique index",
                resolver_id=resolver_id,
                error=str(exc.orig),
            )
            raise ConflictError(
                "Another resolver already uses this provider and hostname"
            ) from exc
        return resolver

    async def soft_delete_by_id(self, resolver_id: int) -> Resolver | None:
        """Mark a live resolver deleted. Returns None when no live row matched."""
        if not _storable_id(resolver_id):
            return None
        stmt = (
            update(Resolver)
            .where(Resolver.id == resolver_id, Resolver.is_deleted.is_(False))
            .values(is_deleted=True, mtime=utcnow())
            .returning(Resolver)
        )
        result = await self.session.execute(stmt)
        resolver = result.scalar_one_or_none()
        await self.session.commit()
        return resolver
