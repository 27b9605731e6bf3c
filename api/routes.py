"""
Recipe Catalog API Routes
Main router configuration for all API endpoints
"""

from fastapi import APIRouter
import structlog

from api.endpoints import admin, categories, recipes, tags

logger = structlog.get_logger()

# Create main API router
api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    recipes.router,
    prefix="/recipes",
    tags=["recipes"]
)

api_router.include_router(
    categories.router,
    prefix="/categories",
    tags=["categories"]
)

api_router.include_router(
    tags.router,
    prefix="/tags",
    tags=["tags"]
)

api_router.include_router(
    admin.router,
    prefix="/admin",
    tags=["admin"]
)

logger.info("API routes configured successfully")
