"""CLI commands for address ledger transitions."""

from __future__ import annotations

import click

from dcinventory.cli.client import api_call
from dcinventory.cli.output import console


@click.group("ips")
def ips_cmd() -> None:
    """Assign, release and reserve individual addresses."""


@ips_cmd.command("assign")
@click.argument("address_id")
@click.option("--asset", "asset_id", default=None, help="Asset UUID to bind")
@click.option("--hostname", default=None)
@click.pass_context
def ips_assign(
    ctx: click.Context, address_id: str, asset_id: str | None, hostname: str | None
) -> None:
    """Assign an available address."""
    rec = api_call(
        ctx,
        "POST",
        f"/ip-addresses/{address_id}/assign",
        json={"asset_id": asset_id, "hostname": hostname},
    )
    console.print(f"[cyan]{rec['ip_address']}[/cyan] assigned to {rec['hostname'] or rec['asset_id']}")


@ips_cmd.command("release")
@click.argument("address_id")
@click.pass_context
def ips_release(ctx: click.Context, address_id: str) -> None:
    """Return an address to the pool."""
    rec = api_call(ctx, "POST", f"/ip-addresses/{address_id}/release")
    console.print(f"[green]{rec['ip_address']}[/green] is available")


@ips_cmd.command("reserve")
@click.argument("address_id")
@click.option("--reason", required=True, help="Why the address is held back")
@click.pass_context
def ips_reserve(ctx: click.Context, address_id: str, reason: str) -> None:
    """Reserve an available address."""
    rec = api_call(ctx, "POST", f"/ip-addresses/{address_id}/reserve", json={"reason": reason})
    console.print(f"[yellow]{rec['ip_address']}[/yellow] reserved: {rec['notes']}")
