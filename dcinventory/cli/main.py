"""DCInventory CLI entry point — `dcinv` command group."""

from __future__ import annotations

import click

from dcinventory.cli.commands.ips import ips_cmd
from dcinventory.cli.commands.pools import pools_cmd
from dcinventory.cli.commands.racks import racks_cmd


@click.group()
@click.version_option(package_name="dcinventory")
@click.option(
    "--api-url",
    default="http://localhost:8000",
    envvar="DCINV_API_URL",
    show_default=True,
    help="Base URL of the DCInventory API server",
)
@click.pass_context
def cli(ctx: click.Context, api_url: str) -> None:
    """DCInventory — racks, assets and IP address management.

    \b
    Quick start:
      dcinv pools create lab 10.0.0.0 24 --gateway 10.0.0.1
      dcinv pools show <pool-id> --status available
      dcinv ips assign <address-id> --hostname web01
      dcinv racks layout <rack-id>

    API docs: http://localhost:8000/docs
    """
    ctx.ensure_object(dict)
    ctx.obj["api_url"] = api_url.rstrip("/")


cli.add_command(pools_cmd)
cli.add_command(ips_cmd)
cli.add_command(racks_cmd)


@cli.command("serve")
@click.option("--host", default=None, help="Bind host [default: APP_HOST]")
@click.option("--port", default=None, type=int, help="Bind port [default: APP_PORT]")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Override LOG_LEVEL",
)
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload (dev mode)")
def serve(host: str | None, port: int | None, log_level: str | None, reload: bool) -> None:
    """Start the DCInventory API server."""
    import uvicorn

    from dcinventory.core.config import get_settings
    from dcinventory.core.logging import configure_logging

    settings = get_settings()
    configure_logging(log_level, force=True)
    uvicorn.run(
        "dcinventory.api.app:app",
        host=host or settings.app_host,
        port=port or settings.app_port,
        reload=reload,
        log_level=(log_level or settings.log_level).lower(),
    )


if __name__ == "__main__":
    cli()
