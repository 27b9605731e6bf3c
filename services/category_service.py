"""
Recipe Catalog Category Service
CRUD for recipe categories
"""

from typing import List
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from core.exceptions import NotFoundError, ValidationError
from models.recipe_models import Category, Recipe
from schemas.recipe_schemas import CategoryCreate, CategoryUpdate

logger = structlog.get_logger()


class CategoryService:

    async def get_category(self, db: AsyncSession, category_id: str) -> Category:
        category = await db.get(Category, category_id)
        if category is None:
            raise NotFoundError(f"Category '{category_id}' does not exist")
        return category

    async def find_category(self, db: AsyncSession, reference: str) -> Category:
        """Resolve a category by identifier, falling back to its exact name"""
        category = await db.get(Category, reference)
        if category is None:
            result = await db.execute(select(Category).where(Category.name == reference))
            category = result.scalar_one_or_none()
        if category is None:
            raise NotFoundError(f"Category '{reference}' does not exist")
        return category

    async def list_categories(self, db: AsyncSession) -> List[Category]:
        result = await db.execute(select(Category).order_by(Category.name))
        return list(result.scalars().all())

    async def create_category(self, db: AsyncSession, data: CategoryCreate) -> Category:
        await self._ensure_unique_name(db, data.name)

        category = Category(name=data.name, description=data.description)
        db.add(category)
        await db.commit()

        logger.info("Category created", category_id=category.id, name=category.name)
        return category

    async def update_category(
        self, db: AsyncSession, category_id: str, data: CategoryUpdate
    ) -> Category:
        category = await self.get_category(db, category_id)
        changes = data.changes()

        if "name" in changes and changes["name"] != category.name:
            await self._ensure_unique_name(db, changes["name"])

        for field, value in changes.items():
            setattr(category, field, value)
        await db.commit()

        logger.info("Category updated", category_id=category.id, fields=sorted(changes))
        return category

    async def delete_category(self, db: AsyncSession, category_id: str) -> Category:
        """Delete a category; refused while any recipe still references it"""
        category = await self.get_category(db, category_id)

        in_use = await db.scalar(
            select(func.count()).select_from(Recipe).where(Recipe.category_id == category.id)
        )
        if in_use:
            raise ValidationError(
                f"Category '{category.name}' is used by {in_use} recipe(s) and cannot be deleted"
            )

        await db.delete(category)
        await db.commit()

        logger.info("Category deleted", category_id=category.id)
        return category

    async def _ensure_unique_name(self, db: AsyncSession, name: str) -> None:
        existing = await db.scalar(select(Category.id).where(Category.name == name))
        if existing is not None:
            raise ValidationError(f"Category '{name}' already exists")


category_service = CategoryService()
