"""Tests for the dcinv terminal client."""

import httpx
import pytest
from click.testing import CliRunner
from rich.console import Console

from dcinventory.cli.main import cli
from dcinventory.cli.output import rack_elevation


@pytest.fixture
def fake_api(monkeypatch):
    """Route httpx.request to a canned (status, body) and record the calls."""
    calls = []
    reply = {"status": 200, "body": None}

    def fake_request(method, url, json=None, params=None, timeout=None):
        calls.append({"method": method, "url": url, "json": json})
        return httpx.Response(
            reply["status"], json=reply["body"], request=httpx.Request(method, url)
        )

    monkeypatch.setattr(httpx, "request", fake_request)
    return calls, reply


def test_help_lists_commands():
    result = CliRunner().invoke(cli, ["--help"])
    assert result.exit_code == 0
    for name in ("pools", "ips", "racks", "serve"):
        assert name in result.output


def test_reserve_sends_reason(fake_api):
    calls, reply = fake_api
    reply["body"] = {"ip_address": "10.0.0.9", "notes": "VIP"}

    result = CliRunner().invoke(
        cli, ["--api-url", "http://api:9000/", "ips", "reserve", "abc", "--reason", "VIP"]
    )
    assert result.exit_code == 0
    assert "10.0.0.9" in result.output
    assert calls == [
        {
            "method": "POST",
            "url": "http://api:9000/api/v1/ip-addresses/abc/reserve",
            "json": {"reason": "VIP"},
        }
    ]


def test_api_error_exits_with_detail(fake_api):
    _, reply = fake_api
    reply["status"] = 409
    reply["body"] = {"detail": "IP address 10.0.0.2 is assigned; release it first"}

    result = CliRunner().invoke(cli, ["ips", "assign", "abc", "--hostname", "web01"])
    assert result.exit_code == 1
    assert "release it first" in result.output


def test_rack_elevation_renders_top_down():
    layout = {
        "height_units": 4,
        "used_units": 2,
        "spans": [
            {"asset_id": "x", "asset_name": "X", "start_unit": 1, "end_unit": 2, "height_units": 2}
        ],
        "free_units": [3, 4],
    }
    console = Console(record=True, width=80)
    console.print(rack_elevation(layout))
    text = console.export_text()
    assert "2/4U used" in text
    assert "X (2U)" in text
    # U1 is the top unit, so the label sits on the first row and U4 is printed last
    rows = [line.strip("│ ") for line in text.splitlines()]
    rows = [row for row in rows if row[:1].isdigit()]
    assert rows[0].split()[0] == "1" and "X (2U)" in rows[0]
    assert rows[-1].split()[0] == "4"
