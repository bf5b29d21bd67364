"""CLI commands for racks and asset placement."""

from __future__ import annotations

import click

from dcinventory.cli.client import api_call
from dcinventory.cli.output import console, rack_elevation, racks_table


@click.group("racks")
def racks_cmd() -> None:
    """Browse racks and move assets in and out of them."""


@racks_cmd.command("list")
@click.option("--data-center", "data_center_id", default=None, help="Filter by data center UUID")
@click.option("--limit", default=50, show_default=True)
@click.pass_context
def racks_list(ctx: click.Context, data_center_id: str | None, limit: int) -> None:
    """List racks."""
    params: dict[str, str | int] = {"limit": limit}
    if data_center_id:
        params["data_center_id"] = data_center_id
    data = api_call(ctx, "GET", "/racks", params=params)
    console.print(racks_table(data["items"]))


@racks_cmd.command("layout")
@click.argument("rack_id")
@click.pass_context
def racks_layout(ctx: click.Context, rack_id: str) -> None:
    """Print a rack's unit-by-unit elevation."""
    layout = api_call(ctx, "GET", f"/racks/{rack_id}/layout")
    console.print(rack_elevation(layout))


@racks_cmd.command("place")
@click.argument("asset_id")
@click.argument("rack_id")
@click.argument("start_unit", type=int)
@click.pass_context
def racks_place(ctx: click.Context, asset_id: str, rack_id: str, start_unit: int) -> None:
    """Place ASSET_ID in RACK_ID starting at START_UNIT."""
    asset = api_call(
        ctx,
        "PUT",
        f"/assets/{asset_id}/placement",
        json={"rack_id": rack_id, "start_unit": start_unit},
    )
    end = asset["rack_position"] + asset["height_units"] - 1
    console.print(f"[green]{asset['name']}[/green] placed at U{asset['rack_position']}-U{end}")


@racks_cmd.command("remove")
@click.argument("asset_id")
@click.pass_context
def racks_remove(ctx: click.Context, asset_id: str) -> None:
    """Take an asset out of its rack."""
    asset = api_call(ctx, "DELETE", f"/assets/{asset_id}/placement")
    console.print(f"[green]{asset['name']}[/green] removed from rack")
