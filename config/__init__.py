"""
Configuration package.

Usage:
    from config import get_settings

    settings = get_settings()
"""
from config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
