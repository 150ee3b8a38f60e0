"""Rich output helpers — resolver tables and detail views."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

console = Console()


def fmt_date(iso: str | None) -> str:
    if not iso:
        return "—"
    try:
        dt = datetime.fromisoformat(iso.replace("Z", "+00:00"))
        return dt.strftime("%Y-%m-%d %H:%M:%S")
    except ValueError:
        return iso


def resolvers_table(items: list[dict[str, Any]]) -> Table:
    table = Table(
        title=f"Resolvers ({len(items)})",
        show_header=True,
        header_style="bold cyan",
        border_style="dim",
        show_lines=False,
    )
    table.add_column("ID", justify="right", style="bold", no_wrap=True)
    table.add_column("Provider")
    table.add_column("Hostname", no_wrap=True)
    table.add_column("Alias")
    table.add_column("IPv4", no_wrap=True)
    table.add_column("Deleted", justify="center")
    table.add_column("Modified", style="dim")

    for r in items:
        deleted = Text("✓", style="red") if r.get("isDeleted") else Text("✗", style="dim")
        table.add_row(
            str(r.get("id")),
            r.get("provider") or "—",
            r.get("hostname") or "—",
            r.get("alias") or "—",
            r.get("ipv4") or "—",
            deleted,
            fmt_date(r.get("mtime")),
        )

    return table


def resolver_detail(r: dict[str, Any]) -> None:
    """Print detailed view of a single resolver."""
    console.rule(f"[bold cyan]Resolver #{r.get('id')} — {r.get('hostname')}")

    fields = [
        ("ID", r.get("id")),
        ("Provider", r.get("provider")),
        ("Hostname", r.get("hostname")),
        ("Alias", r.get("alias") or "—"),
        ("IPv4", r.get("ipv4") or "—"),
        ("Deleted", "yes" if r.get("isDeleted") else "no"),
        ("Created", fmt_date(r.get("ctime"))),
        ("Modified", fmt_date(r.get("mtime"))),
    ]
    for label, value in fields:
        console.print(f"  [bold]{label:<10}[/bold] {value}")


def print_api_error(response: Any) -> None:
    """Render an ``{"error": ..., "errors": [...]}`` body from the API."""
    try:
        body = response.json()
    except ValueError:
        body = {}
    message = body.get("error") or response.text
    console.print(f"[red]Error {response.status_code}:[/red] {message}")
    for detail in body.get("errors", []):
        console.print(f"  [red]•[/red] {detail}")
