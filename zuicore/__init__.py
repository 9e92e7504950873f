"""Cooperative engine scheduler with signals and timers, stroke styles and a tile cache for zoomable user interfaces."""

__version__ = "0.1.0"

__all__ = ["engine", "scheduler", "signal", "state", "stroke", "tile_cache", "timer"]