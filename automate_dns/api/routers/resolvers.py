"""Resolvers API router."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status

from automate_dns.api.dependencies import get_resolver_service
from automate_dns.api.request import (
    optional_string,
    parse_boolean,
    parse_limit,
    parse_offset,
    parse_resolver_id,
    read_json_body,
)
from automate_dns.models.resolver import Resolver
from automate_dns.resolvers.service import ResolverService
from automate_dns.schemas.resolver import ResolverList, ResolverOut

router = APIRouter(prefix="/resolvers", tags=["resolvers"])

ServiceDep = Annotated[ResolverService, Depends(get_resolver_service)]


@router.get("", response_model=ResolverList)
async def list_resolvers(request: Request, service: ServiceDep) -> ResolverList:
    params = request.query_params
    limit = parse_limit(params.get("limit"))
    offset = parse_offset(params.get("offset"))
    rows = await service.list_resolvers(
        provider=optional_string(params.get("provider")),
        hostname=optional_string(params.get("hostname")),
        include_deleted=parse_boolean(params.get("includeDeleted")),
        limit=limit,
        offset=offset,
    )
    items = [ResolverOut.model_validate(row) for row in rows]
    return ResolverList(items=items, limit=limit, offset=offset, count=len(items))


@router.post("", response_model=ResolverOut, status_code=status.HTTP_201_CREATED)
async def create_resolver(request: Request, service: ServiceDep) -> Resolver:
    body = await read_json_body(request)
    return await service.create_resolver(body)


@router.get("/{resolver_id}", response_model=ResolverOut)
async def get_resolver(resolver_id: str, request: Request, service: ServiceDep) -> Resolver:
    rid = parse_resolver_id(resolver_id)
    include_deleted = parse_boolean(request.query_params.get("includeDeleted"))
    return await service.get_resolver(rid, include_deleted=include_deleted)


# PUT and PATCH share partial-update semantics
@router.api_route("/{resolver_id}", methods=["PUT", "PATCH"], response_model=ResolverOut)
async def update_resolver(resolver_id: str, request: Request, service: ServiceDep) -> Resolver:
    rid = parse_resolver_id(resolver_id)
    body = await read_json_body(request)
    return await service.update_resolver(rid, body)


@router.delete("/{resolver_id}", response_model=ResolverOut)
async def delete_resolver(resolver_id: str, service: ServiceDep) -> Resolver:
    rid = parse_resolver_id(resolver_id)
    return await service.delete_resolver(rid)
