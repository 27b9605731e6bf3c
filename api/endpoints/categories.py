"""
Recipe Catalog Category Endpoints
"""

from fastapi import APIRouter, status
from typing import List

from core.dependencies import AdminUser, DBSession
from schemas.recipe_schemas import CategoryCreate, CategoryResponse, CategoryUpdate
from services.category_service import category_service

router = APIRouter()


@router.get("", response_model=List[CategoryResponse])
async def list_categories(db: DBSession):
    return await category_service.list_categories(db)


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str, db: DBSession):
    return await category_service.get_category(db, category_id)


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(category_data: CategoryCreate, db: DBSession, _admin: AdminUser):
    return await category_service.create_category(db, category_data)


@router.put("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str, category_data: CategoryUpdate, db: DBSession, _admin: AdminUser
):
    return await category_service.update_category(db, category_id, category_data)


@router.delete("/{category_id}", response_model=CategoryResponse)
async def delete_category(category_id: str, db: DBSession, _admin: AdminUser):
    """Delete a category that no recipe references"""
    return await category_service.delete_category(db, category_id)
