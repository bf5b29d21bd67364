"""Rich output helpers — tables and detail views."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

console = Console()


def status_style(status: str) -> str:
    return {
        "available": "green",
        "assigned": "cyan",
        "reserved": "yellow",
        "blocked": "red",
        "active": "green",
        "maintenance": "yellow",
        "occupied": "cyan",
        "retired": "dim",
        "inactive": "dim",
    }.get(status, "white")


def fmt_date(iso: str | None) -> str:
    if not iso:
        return "—"
    try:
        dt = datetime.fromisoformat(iso.replace("Z", "+00:00"))
        return dt.strftime("%Y-%m-%d %H:%M")
    except ValueError:
        return iso


def pools_table(items: list[dict[str, Any]]) -> Table:
    table = Table(
        title=f"IP pools ({len(items)})",
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Network", no_wrap=True)
    table.add_column("Gateway")
    table.add_column("VLAN", justify="right")
    table.add_column("DNS")
    table.add_column("Description")

    for p in items:
        table.add_row(
            str(p.get("id", ""))[:8] + "…",
            p.get("name", ""),
            p.get("cidr", ""),
            p.get("gateway") or "—",
            str(p["vlan_id"]) if p.get("vlan_id") else "—",
            ", ".join(p.get("dns_servers") or []) or "—",
            p.get("description") or "",
        )
    return table


def pool_stats_line(stats: dict[str, Any]) -> None:
    console.rule(f"[bold cyan]{stats['name']} — {stats['cidr']}")
    console.print(
        f"  total [bold]{stats['total']}[/bold]  "
        f"[green]available {stats['available']}[/green]  "
        f"[cyan]assigned {stats['assigned']}[/cyan]  "
        f"[yellow]reserved {stats['reserved']}[/yellow]  "
        f"[red]blocked {stats['blocked']}[/red]  "
        f"utilization {stats['utilization'] * 100:.1f}%"
    )


def addresses_table(items: list[dict[str, Any]]) -> Table:
    table = Table(
        title=f"Addresses ({len(items)})",
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Address", style="bold", no_wrap=True)
    table.add_column("Status")
    table.add_column("Hostname")
    table.add_column("Asset", style="dim")
    table.add_column("Assigned", style="dim")
    table.add_column("Notes")

    for a in items:
        status = a.get("status", "?")
        table.add_row(
            str(a.get("id", "")),
            a.get("ip_address", ""),
            Text(status, style=status_style(status)),
            a.get("hostname") or "—",
            str(a["asset_id"])[:8] + "…" if a.get("asset_id") else "—",
            fmt_date(a.get("assignment_date")),
            a.get("notes") or "",
        )
    return table


def racks_table(items: list[dict[str, Any]]) -> Table:
    table = Table(
        title=f"Racks ({len(items)})",
        header_style="bold cyan",
        border_style="dim",
    )
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Row/Col")
    table.add_column("Height", justify="right")
    table.add_column("Status")

    for r in items:
        status = r.get("status", "?")
        table.add_row(
            str(r.get("id", "")),
            r.get("name", ""),
            f"{r.get('row_position')}/{r.get('column_position')}",
            f"{r.get('height_units')}U",
            Text(status, style=status_style(status)),
        )
    return table


def rack_elevation(layout: dict[str, Any]) -> Table:
    """One row per rack unit, top of the rack first."""
    by_unit: dict[int, dict[str, Any]] = {}
    for span in layout.get("spans", []):
        for unit in range(span["start_unit"], span["end_unit"] + 1):
            by_unit[unit] = span

    table = Table(
        title=f"Rack elevation — {layout['used_units']}/{layout['height_units']}U used",
        header_style="bold cyan",
        border_style="dim",
        show_lines=False,
    )
    table.add_column("U", justify="right", style="dim")
    table.add_column("Asset")

    for unit in range(1, layout["height_units"] + 1):
        span = by_unit.get(unit)
        if span is None:
            table.add_row(str(unit), Text("·", style="dim"))
        elif unit == span["start_unit"]:
            label = f"{span['asset_name'] or span['asset_id']} ({span['height_units']}U)"
            table.add_row(str(unit), Text(label, style="bold green"))
        else:
            table.add_row(str(unit), Text("│", style="green"))
    return table
