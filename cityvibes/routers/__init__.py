"""Routers package."""
from cityvibes.routers.vibe_router import router as vibe_router, set_vibe_handler
from cityvibes.routers.debug_router import router as debug_router, set_debug_dependencies

__all__ = ["vibe_router", "set_vibe_handler", "debug_router", "set_debug_dependencies"]
