"""HTTP handlers package."""
from cityvibes.handlers.vibe_handler import VibeHandler

__all__ = ["VibeHandler"]
