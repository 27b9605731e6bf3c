"""
Recipe Catalog Core Module
Central configuration and utilities
"""

from .config import settings, get_settings, Settings
from .database import Base, Database, get_db

__all__ = [
    "settings",
    "get_settings",
    "Settings",
    "Base",
    "Database",
    "get_db",
]
