"""``hotelbridge tools`` — inspect and invoke the local tool registry."""

from __future__ import annotations

import asyncio
import json
from typing import Any

import click

from hotelbridge.cli_commands._output import console, print_json, print_tools_table


@click.group()
def tools() -> None:
    """Inspect and invoke tools."""


@tools.command("list")
@click.option("--json", "as_json", is_flag=True, help="Print the raw tools/list result.")
def list_tools(as_json: bool) -> None:
    """List the registered tools."""
    from hotelbridge.config import Settings
    from hotelbridge.tools.catalog import build_registry

    listings = build_registry(Settings.from_env()).listings()
    if as_json:
        print_json({"tools": listings})
        return
    print_tools_table(listings)


@tools.command("call")
@click.argument("name")
@click.option(
    "--arguments",
    "-a",
    "raw_arguments",
    default="{}",
    show_default=True,
    help="Tool arguments as a JSON object.",
)
def call_tool(name: str, raw_arguments: str) -> None:
    """Invoke tool NAME through the registry and print the JSON-RPC response."""
    from hotelbridge.config import Settings
    from hotelbridge.tools.catalog import build_registry

    try:
        arguments: Any = json.loads(raw_arguments)
    except json.JSONDecodeError as exc:
        console.print(f"[red]Invalid --arguments JSON:[/red] {exc}")
        raise SystemExit(2) from exc

    registry = build_registry(Settings.from_env())
    response = asyncio.run(registry.call(1, {"name": name, "arguments": arguments}))
    print_json(response)
    if "error" in response or response.get("result", {}).get("isError"):
        raise SystemExit(1)
