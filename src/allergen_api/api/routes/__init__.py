"""API routes."""

from . import logo, maps, menu, restaurants

__all__ = ["logo", "maps", "menu", "restaurants"]
