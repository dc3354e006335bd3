"""hotelbridge CLI entrypoint."""

from __future__ import annotations

import logging

import click

from hotelbridge import __version__


@click.group()
@click.version_option(version=__version__, prog_name="hotelbridge")
@click.option(
    "--log-level",
    envvar="LOG_LEVEL",
    default="INFO",
    show_default=True,
    help="Root logging level.",
)
def main(log_level: str) -> None:
    """hotelbridge — hotel-booking tools over JSON-RPC, with an LLM chat front end."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
from hotelbridge.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
