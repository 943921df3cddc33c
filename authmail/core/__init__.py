"""Configuration and security primitives."""

from .config import Settings, settings

__all__ = ["Settings", "settings"]
