"""Tool registry and the booking API tool catalog."""

from hotelbridge.tools.booking_api import BookingApiClient
from hotelbridge.tools.catalog import CATALOG, ApiTool, build_registry
from hotelbridge.tools.registry import ToolDefinition, ToolRegistry

__all__ = [
    "CATALOG",
    "ApiTool",
    "BookingApiClient",
    "ToolDefinition",
    "ToolRegistry",
    "build_registry",
]
