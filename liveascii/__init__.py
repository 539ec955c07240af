"""Rig physics, physics-file parsing, face-tracking and message receivers, glyph shaders, popups and key helpers for terminal ASCII character rendering."""

__version__ = "0.1.0"