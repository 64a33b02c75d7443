"""Bombtris: falling-block puzzle with bomb, laser and extruder blocks."""

__version__ = "0.1.0"
