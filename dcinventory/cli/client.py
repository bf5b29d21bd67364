"""Thin HTTP helper shared by CLI commands."""

from __future__ import annotations

from typing import Any

import click
import httpx

from dcinventory.cli.output import console


def api_call(
    ctx: click.Context,
    method: str,
    path: str,
    *,
    json: dict[str, Any] | None = None,
    params: dict[str, Any] | None = None,
    timeout: float = 15,
) -> Any:
    """Call the API and return decoded JSON; exit 1 with a readable error on failure."""
    api_url: str = ctx.obj["api_url"]
    try:
        r = httpx.request(
            method, f"{api_url}/api/v1{path}", json=json, params=params, timeout=timeout
        )
        r.raise_for_status()
    except httpx.ConnectError:
        console.print(
            f"[red]Cannot connect to API at {api_url}.[/red] "
            "Is the server running? (dcinv serve)"
        )
        raise SystemExit(1)
    except httpx.HTTPStatusError as e:
        try:
            detail = e.response.json().get("detail", e.response.text)
        except ValueError:
            detail = e.response.text
        console.print(f"[red]Error {e.response.status_code}:[/red] {detail}")
        raise SystemExit(1)
    if r.status_code == 204 or not r.content:
        return None
    return r.json()
