"""CLI commands for resolver management."""

from __future__ import annotations

from typing import Any

import click

from automate_dns.cli.output import console, print_api_error, resolver_detail, resolvers_table


def _call(ctx: click.Context, method: str, path: str, **kwargs: Any):
    """Send one request to the API; exit 1 on connection or HTTP errors."""
    import httpx

    api_url: str = ctx.obj["api_url"]
    try:
        r = httpx.request(method, f"{api_url}{path}", timeout=30, **kwargs)
    except httpx.ConnectError:
        console.print(f"[red]Cannot connect to API at {api_url}.[/red]")
        raise SystemExit(1)

    if r.is_error:
        print_api_error(r)
        raise SystemExit(1)
    return r


def _payload(**values: str | None) -> dict[str, str]:
    return {k: v for k, v in values.items() if v is not None}


@click.group("resolvers")
def resolvers_cmd() -> None:
    """Create, inspect and remove resolver records."""


@resolvers_cmd.command("list")
@click.option("--provider", default=None, help="Only resolvers for this provider")
@click.option("--hostname", default=None, help="Only resolvers with this exact hostname")
@click.option("--include-deleted", is_flag=True, default=False, help="Include soft-deleted rows")
@click.option("--limit", default=100, show_default=True, help="Max rows to display")
@click.option("--offset", default=0, show_default=True, help="Rows to skip")
@click.pass_context
def resolvers_list(
    ctx: click.Context,
    provider: str | None,
    hostname: str | None,
    include_deleted: bool,
    limit: int,
    offset: int,
) -> None:
    """List resolvers, newest first."""
    params: dict[str, str | int] = {"limit": limit, "offset": offset}
    if provider:
        params["provider"] = provider
    if hostname:
        params["hostname"] = hostname
    if include_deleted:
        params["includeDeleted"] = "true"

    data = _call(ctx, "GET", "/resolvers", params=params).json()
    console.print(resolvers_table(data["items"]))
    console.print(f"[dim]Showing {data['count']} resolvers (offset {data['offset']}).[/dim]")


@resolvers_cmd.command("show")
@click.argument("resolver_id", type=int)
@click.option("--include-deleted", is_flag=True, default=False, help="Allow soft-deleted rows")
@click.pass_context
def resolvers_show(ctx: click.Context, resolver_id: int, include_deleted: bool) -> None:
    """Show one resolver by id."""
    params = {"includeDeleted": "true"} if include_deleted else {}
    r = _call(ctx, "GET", f"/resolvers/{resolver_id}", params=params)
    resolver_detail(r.json())


@resolvers_cmd.command("create")
@click.option("--provider", required=True, help="Provider name")
@click.option("--hostname", required=True, help="Fully-qualified hostname")
@click.option("--alias", default=None, help="Free-form label")
@click.option("--ipv4", default=None, help="IPv4 address to publish as an A-record")
@click.pass_context
def resolvers_create(
    ctx: click.Context, provider: str, hostname: str, alias: str | None, ipv4: str | None
) -> None:
    """Create a resolver (syncs DNS when --ipv4 is given)."""
    body = _payload(provider=provider, hostname=hostname, alias=alias, ipv4=ipv4)
    r = _call(ctx, "POST", "/resolvers", json=body)
    console.print("[green]Resolver created.[/green]")
    resolver_detail(r.json())


@resolvers_cmd.command("update")
@click.argument("resolver_id", type=int)
@click.option("--provider", default=None)
@click.option("--hostname", default=None)
@click.option("--alias", default=None)
@click.option("--ipv4", default=None, help='New address ("" clears it)')
@click.pass_context
def resolvers_update(
    ctx: click.Context,
    resolver_id: int,
    provider: str | None,
    hostname: str | None,
    alias: str | None,
    ipv4: str | None,
) -> None:
    """Update selected fields of a resolver."""
    body = _payload(provider=provider, hostname=hostname, alias=alias, ipv4=ipv4)
    if not body:
        raise click.UsageError("Pass at least one of --provider, --hostname, --alias, --ipv4")
    r = _call(ctx, "PATCH", f"/resolvers/{resolver_id}", json=body)
    console.print("[green]Resolver updated.[/green]")
    resolver_detail(r.json())


@resolvers_cmd.command("delete")
@click.argument("resolver_id", type=int)
@click.pass_context
def resolvers_delete(ctx: click.Context, resolver_id: int) -> None:
    """Soft-delete a resolver. Its DNS record is left in place."""
    r = _call(ctx, "DELETE", f"/resolvers/{resolver_id}")
    console.print(f"[yellow]Resolver #{r.json()['id']} deleted.[/yellow]")
