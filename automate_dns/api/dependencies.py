"""FastAPI dependency providers."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from automate_dns.core.config import get_settings
from automate_dns.core.database import get_session_factory
from automate_dns.dns.reconciler import DnsReconciler
from automate_dns.resolvers.service import ResolverService
from automate_dns.resolvers.store import ResolverStore


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield a database session for the duration of a request."""
    factory = get_session_factory()
    async with factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def get_dns_reconciler() -> DnsReconciler:
    return DnsReconciler.from_settings(get_settings())


def get_resolver_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    dns: Annotated[DnsReconciler, Depends(get_dns_reconciler)],
) -> ResolverService:
    return ResolverService(ResolverStore(db), dns)
