"""Smoke test to verify the project scaffolding works."""

from __future__ import annotations


def test_import() -> None:
    import hotelbridge

    assert hotelbridge.__version__ == "0.1.0"


def test_cli_entrypoint() -> None:
    from hotelbridge.cli import main

    assert callable(main)


def test_lazy_exports() -> None:
    import hotelbridge

    assert hotelbridge.Settings is not None
    assert callable(hotelbridge.create_app)
