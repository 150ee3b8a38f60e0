"""automate-dns CLI entry point."""

from __future__ import annotations

import click

from automate_dns.cli.commands.resolvers import resolvers_cmd


@click.group()
@click.version_option(package_name="automate-dns")
@click.option(
    "--api-url",
    default="http://localhost:8000",
    envvar="AUTOMATE_DNS_API_URL",
    show_default=True,
    help="Base URL of the automate-dns API server",
)
@click.pass_context
def cli(ctx: click.Context, api_url: str) -> None:
    """automate-dns — resolver registry with Cloudflare A-record sync.

    \b
    Quick start:
      automate-dns serve
      automate-dns resolvers create --provider cf --hostname a.example.com --ipv4 1.2.3.4
      automate-dns resolvers list
      automate-dns resolvers show 1

    API docs: http://localhost:8000/docs
    """
    ctx.ensure_object(dict)
    ctx.obj["api_url"] = api_url.rstrip("/")


cli.add_command(resolvers_cmd)


@cli.command("serve")
@click.option("--host", default=None, help="Bind host (default: APP_HOST)")
@click.option("--port", default=None, type=int, help="Bind port (default: APP_PORT)")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload (dev mode)")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the automate-dns API server."""
    import uvicorn

    from automate_dns.core.config import get_settings

    settings = get_settings()
    uvicorn.run(
        "automate_dns.api.app:app",
        host=host or settings.app_host,
        port=port or settings.app_port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    cli()
