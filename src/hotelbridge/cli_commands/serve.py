"""``hotelbridge serve`` — run the HTTP endpoints with uvicorn."""

from __future__ import annotations

import click


@click.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Bind address.")
@click.option("--port", default=8000, show_default=True, type=int, help="Bind port.")
@click.option("--trace", is_flag=True, help="Export OpenTelemetry spans to the console.")
@click.option("--otlp-endpoint", default=None, help="Export spans via OTLP/gRPC to this endpoint.")
def serve(host: str, port: int, trace: bool, otlp_endpoint: str | None) -> None:
    """Serve POST /mcp and POST /chat."""
    import uvicorn

    from hotelbridge.config import Settings
    from hotelbridge.server.app import create_app

    if trace or otlp_endpoint:
        from hotelbridge.utils.telemetry import configure_telemetry

        configure_telemetry(export_to_console=trace, otlp_endpoint=otlp_endpoint)

    app = create_app(Settings.from_env())
    uvicorn.run(app, host=host, port=port, log_config=None)
