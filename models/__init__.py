"""
Recipe Catalog Database Models
Central import module for all database models
"""

from .recipe_models import Recipe, Category, Tag, recipe_tags
from .users import User, UserRole

__all__ = [
    # Recipe catalog models
    "Recipe",
    "Category",
    "Tag",
    "recipe_tags",

    # User models
    "User",
    "UserRole",
]
