"""
Recipe Catalog Recipe Schemas
Request validation and response shapes for recipes, categories and tags
"""

from datetime import datetime
from typing import ClassVar, FrozenSet, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _require_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if not value:
        raise ValueError("must not be blank")
    return value


def _clean_ingredients(value: Optional[List[str]]) -> Optional[List[str]]:
    if value is None:
        return value
    return [item.strip() for item in value if item and item.strip()]


class _PartialUpdate(BaseModel):
    """Partial update: omitted fields are left alone, ``null`` is only allowed where optional"""

    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def reject_null_required_fields(self):
        for name in self.model_fields_set:
            if getattr(self, name) is None and name not in self.nullable_fields:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


# Categories

class CategoryCreate(BaseModel):
    """Schema for category creation"""
    name: str = Field(..., max_length=100)
    description: Optional[str] = Field(None, max_length=1000)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _require_text(v)


class CategoryUpdate(_PartialUpdate):
    """Schema for category updates"""
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"description"})

    name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = Field(None, max_length=1000)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _require_text(v)


class CategoryRef(BaseModel):
    """Category as embedded in a recipe"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class CategoryResponse(CategoryRef):
    """Schema for category response"""
    description: Optional[str] = None
    created_at: datetime


# Tags

class TagCreate(BaseModel):
    """Schema for tag creation"""
    name: str = Field(..., max_length=100)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _require_text(v)


class TagUpdate(_PartialUpdate):
    """Schema for tag updates"""
    name: Optional[str] = Field(None, max_length=100)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v):
        return _require_text(v)


class TagRef(BaseModel):
    """Tag as embedded in a recipe"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class TagResponse(TagRef):
    """Schema for tag response"""
    created_at: datetime


# Recipes

class RecipeCreate(BaseModel):
    """
    Schema for recipe creation

    ``category`` and ``tags`` accept either identifiers or exact names.
    """
    title: str = Field(..., max_length=255)
    ingredients: List[str]
    instructions: str
    category: str = Field(..., min_length=1)
    tags: List[str] = Field(default_factory=list)

    @field_validator("title", "instructions")
    @classmethod
    def validate_text(cls, v):
        return _require_text(v)

    @field_validator("ingredients")
    @classmethod
    def validate_ingredients(cls, v):
        return _clean_ingredients(v)


class RecipeUpdate(_PartialUpdate):
    """Schema for partial recipe updates"""
    title: Optional[str] = Field(None, max_length=255)
    ingredients: Optional[List[str]] = None
    instructions: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1)
    tags: Optional[List[str]] = None

    @field_validator("title", "instructions")
    @classmethod
    def validate_text(cls, v):
        return _require_text(v)

    @field_validator("ingredients")
    @classmethod
    def validate_ingredients(cls, v):
        return _clean_ingredients(v)


class RecipeRating(BaseModel):
    """Schema for a rating submission"""
    rating: int


class RecipeResponse(BaseModel):
    """Schema for recipe response"""
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    ingredients: List[str]
    instructions: str
    category: CategoryRef
    tags: List[TagRef] = []
    rating: float = 0.0
    total_ratings: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None
