"""Helpers for a cStor CSI volume driver: sizes, payloads, usage events, volume configs and node utilities."""

__version__ = "0.1.0"