"""
Recipe Catalog Tag Endpoints
"""

from fastapi import APIRouter, status
from typing import List

from core.dependencies import AdminUser, DBSession
from schemas.recipe_schemas import TagCreate, TagResponse, TagUpdate
from services.tag_service import tag_service

router = APIRouter()


@router.get("", response_model=List[TagResponse])
async def list_tags(db: DBSession):
    return await tag_service.list_tags(db)


@router.get("/{tag_id}", response_model=TagResponse)
async def get_tag(tag_id: str, db: DBSession):
    return await tag_service.get_tag(db, tag_id)


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(tag_data: TagCreate, db: DBSession, _admin: AdminUser):
    return await tag_service.create_tag(db, tag_data)


@router.put("/{tag_id}", response_model=TagResponse)
async def update_tag(tag_id: str, tag_data: TagUpdate, db: DBSession, _admin: AdminUser):
    return await tag_service.update_tag(db, tag_id, tag_data)


@router.delete("/{tag_id}", response_model=TagResponse)
async def delete_tag(tag_id: str, db: DBSession, _admin: AdminUser):
    """Delete a tag that no recipe carries"""
    return await tag_service.delete_tag(db, tag_id)
