"""
Recipe Catalog API Endpoints
All API endpoint modules
"""

# Import all endpoint modules
from . import admin, categories, health, recipes, tags

__all__ = [
    "admin",
    "categories",
    "health",
    "recipes",
    "tags",
]
