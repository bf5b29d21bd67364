"""CLI commands for IP pools."""

from __future__ import annotations

import click

from dcinventory.cli.client import api_call
from dcinventory.cli.output import addresses_table, console, pool_stats_line, pools_table


@click.group("pools")
def pools_cmd() -> None:
    """Create and inspect IP address pools."""


@pools_cmd.command("list")
@click.option("--limit", default=50, show_default=True, help="Max rows to display")
@click.pass_context
def pools_list(ctx: click.Context, limit: int) -> None:
    """List IP pools."""
    data = api_call(ctx, "GET", "/ip-pools", params={"limit": limit})
    console.print(pools_table(data["items"]))
    console.print(f"[dim]Showing {len(data['items'])} of {data['total']} pools.[/dim]")


@pools_cmd.command("create")
@click.argument("name")
@click.argument("network")
@click.argument("prefix", type=click.IntRange(8, 30))
@click.option("--gateway", default=None, help="Gateway address (reserved on creation)")
@click.option("--vlan", "vlan_id", type=click.IntRange(1, 4094), default=None)
@click.option("--dns", "dns_servers", default=None, help="Comma-separated DNS servers")
@click.option("--description", default=None)
@click.pass_context
def pools_create(
    ctx: click.Context,
    name: str,
    network: str,
    prefix: int,
    gateway: str | None,
    vlan_id: int | None,
    dns_servers: str | None,
    description: str | None,
) -> None:
    """Create pool NAME for NETWORK/PREFIX and seed its addresses."""
    payload = {
        "name": name,
        "network_address": network,
        "prefix_length": prefix,
        "gateway": gateway,
        "vlan_id": vlan_id,
        "dns_servers": dns_servers,
        "description": description,
    }
    with console.status(f"Seeding {network}/{prefix}…"):
        pool = api_call(ctx, "POST", "/ip-pools", json=payload, timeout=120)
    console.print(f"[green]Created pool[/green] {pool['name']} ({pool['cidr']}) id={pool['id']}")


@pools_cmd.command("show")
@click.argument("pool_id")
@click.option(
    "--status",
    type=click.Choice(["available", "assigned", "reserved", "blocked"]),
    default=None,
    help="Only list addresses in this state",
)
@click.option("--limit", default=64, show_default=True)
@click.pass_context
def pools_show(ctx: click.Context, pool_id: str, status: str | None, limit: int) -> None:
    """Show pool utilization and its addresses."""
    stats = api_call(ctx, "GET", f"/ip-pools/{pool_id}/stats")
    pool_stats_line(stats)
    params: dict[str, str | int] = {"limit": limit}
    if status:
        params["status"] = status
    data = api_call(ctx, "GET", f"/ip-pools/{pool_id}/addresses", params=params)
    console.print(addresses_table(data["items"]))
    console.print(f"[dim]Showing {len(data['items'])} of {data['total']} addresses.[/dim]")
