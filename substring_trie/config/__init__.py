"""Configuration management for the substring trie."""

from .settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
