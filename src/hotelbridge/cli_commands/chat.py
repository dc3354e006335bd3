"""``hotelbridge chat`` — run one orchestrated chat turn."""

from __future__ import annotations

import asyncio

import click

from hotelbridge.cli_commands._output import console


@click.command()
@click.argument("message")
@click.option("--router-url", default=None, help="Override MCP_URL for this call.")
def chat(message: str, router_url: str | None) -> None:
    """Send MESSAGE through the chat orchestrator and print the reply."""
    from hotelbridge.chat.models import ChatRequest
    from hotelbridge.chat.orchestrator import ChatOrchestrator
    from hotelbridge.config import Settings

    settings = Settings.from_env()
    if router_url:
        settings = settings.model_copy(update={"router_url": router_url})

    try:
        reply = asyncio.run(ChatOrchestrator(settings).run(ChatRequest(message=message)))
    except Exception as exc:
        console.print(f"[red]Chat error:[/red] {exc}")
        raise SystemExit(1) from exc

    console.print(reply.reply)
