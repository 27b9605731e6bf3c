"""
Recipe Catalog Recipe Endpoints
Recipe CRUD operations, search, filtering and rating
"""

from fastapi import APIRouter, Query, status
from typing import List, Optional

from core.dependencies import AdminUser, DBSession, PaginationParams
from schemas.recipe_schemas import RecipeCreate, RecipeRating, RecipeResponse, RecipeUpdate
from services.recipe_service import recipe_service

router = APIRouter()


@router.get("", response_model=List[RecipeResponse])
async def list_recipes(
    db: DBSession,
    pagination: PaginationParams,
    category: Optional[str] = Query(None, description="Category id or name"),
    tag: Optional[str] = Query(None, description="Tag id or name"),
    q: Optional[str] = Query(None, description="Text matched against title, ingredients and instructions"),
):
    """List recipes newest first, optionally filtered"""
    return await recipe_service.list_recipes(
        db,
        category=category,
        tag=tag,
        query=q.strip() if q else None,
        offset=pagination["offset"],
        limit=pagination["limit"],
    )


@router.get("/search", response_model=List[RecipeResponse])
async def search_recipes(
    db: DBSession,
    pagination: PaginationParams,
    q: str = Query("", description="Keyword to search for"),
):
    """Keyword search over title, ingredients and instructions"""
    return await recipe_service.search_recipes(
        db, q, offset=pagination["offset"], limit=pagination["limit"]
    )


@router.get("/category/{category_id}", response_model=List[RecipeResponse])
async def list_recipes_by_category(
    category_id: str,
    db: DBSession,
    pagination: PaginationParams,
):
    """Recipes belonging to one category"""
    return await recipe_service.list_recipes(
        db, category=category_id, offset=pagination["offset"], limit=pagination["limit"]
    )


@router.get("/{recipe_id}", response_model=RecipeResponse)
async def get_recipe(recipe_id: str, db: DBSession):
    """Get specific recipe"""
    return await recipe_service.get_recipe(db, recipe_id)


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
async def create_recipe(recipe_data: RecipeCreate, db: DBSession, _admin: AdminUser):
    """Create new recipe"""
    return await recipe_service.create_recipe(db, recipe_data)


@router.put("/{recipe_id}", response_model=RecipeResponse)
async def update_recipe(
    recipe_id: str, recipe_data: RecipeUpdate, db: DBSession, _admin: AdminUser
):
    """Update existing recipe; omitted fields keep their values"""
    return await recipe_service.update_recipe(db, recipe_id, recipe_data)


@router.delete("/{recipe_id}", response_model=RecipeResponse)
async def delete_recipe(recipe_id: str, db: DBSession, _admin: AdminUser):
    """Delete recipe"""
    return await recipe_service.delete_recipe(db, recipe_id)


@router.post("/{recipe_id}/rate", response_model=RecipeResponse)
async def rate_recipe(recipe_id: str, rating_data: RecipeRating, db: DBSession):
    """Submit a 1-5 rating"""
    return await recipe_service.rate_recipe(db, recipe_id, rating_data.rating)
