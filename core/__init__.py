"""
Recipe Box Core Module
Central configuration and utilities
"""

from .config import settings, get_settings, Settings
from .database import Base, Database

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "Base",
    "Database",
]
