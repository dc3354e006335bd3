"""hotelbridge — JSON-RPC tool router and chat orchestrator for a hotel-booking API."""

from __future__ import annotations

from typing import TYPE_CHECKING

__version__ = "0.1.0"

if TYPE_CHECKING:
    from hotelbridge.config import Settings as Settings
    from hotelbridge.server.app import create_app as create_app

_LAZY_EXPORTS = {
    "Settings": "hotelbridge.config",
    "create_app": "hotelbridge.server.app",
}


def __getattr__(name: str) -> object:
    module_path = _LAZY_EXPORTS.get(name)
    if module_path is not None:
        import importlib

        mod = importlib.import_module(module_path)
        return getattr(mod, name)
    raise AttributeError(f"module 'hotelbridge' has no attribute {name!r}")
