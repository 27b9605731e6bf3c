"""
Recipe Catalog Services Module
Core business logic for the recipe catalog
"""

from .auth_service import AuthService
from .category_service import CategoryService, category_service
from .recipe_service import RecipeService, recipe_service
from .tag_service import TagService, tag_service

__all__ = [
    # Auth
    "AuthService",

    # Catalog
    "CategoryService",
    "category_service",
    "RecipeService",
    "recipe_service",
    "TagService",
    "tag_service",
]
