"""
Recipe Catalog Recipe Service
Recipe CRUD, filtering, keyword search and rating
"""

from typing import List, Optional
from sqlalchemy import String, column, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from core.exceptions import NotFoundError, ValidationError
from models.recipe_models import Recipe, Tag, utcnow
from schemas.recipe_schemas import RecipeCreate, RecipeUpdate
from services.category_service import category_service
from services.tag_service import tag_service

logger = structlog.get_logger()

MIN_RATING = 1
MAX_RATING = 5


class RecipeService:
    def __init__(self):
        self.default_page_size = 20

    async def get_recipe(self, db: AsyncSession, recipe_id: str) -> Recipe:
        recipe = await db.get(Recipe, recipe_id)
        if recipe is None:
            raise NotFoundError(f"Recipe '{recipe_id}' does not exist")
        return recipe

    async def list_recipes(
        self,
        db: AsyncSession,
        *,
        category: Optional[str] = None,
        tag: Optional[str] = None,
        query: Optional[str] = None,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[Recipe]:
        """
        List recipes newest first

        Args:
            category: Category identifier or name; unknown categories raise NotFoundError
            tag: Tag identifier or name; unknown tags match nothing
            query: Case-insensitive text matched against title, ingredients and instructions
        """
        statement = select(Recipe)

        if category is not None:
            resolved = await category_service.find_category(db, category)
            statement = statement.where(Recipe.category_id == resolved.id)

        if tag is not None:
            statement = statement.where(
                Recipe.tags.any(or_(Tag.id == tag, Tag.name == tag))
            )

        if query:
            statement = statement.where(
                or_(
                    Recipe.title.icontains(query, autoescape=True),
                    self._ingredient_matches(db, query),
                    Recipe.instructions.icontains(query, autoescape=True),
                )
            )

        statement = (
            statement.order_by(Recipe.created_at.desc(), Recipe.id)
            .offset(offset)
            .limit(limit or self.default_page_size)
        )
        result = await db.execute(statement)
        return list(result.scalars().all())

    async def search_recipes(
        self, db: AsyncSession, query: str, offset: int = 0, limit: Optional[int] = None
    ) -> List[Recipe]:
        query = (query or "").strip()
        if not query:
            raise ValidationError("Search query must not be empty")
        return await self.list_recipes(db, query=query, offset=offset, limit=limit)

    async def create_recipe(self, db: AsyncSession, data: RecipeCreate) -> Recipe:
        category = await self._resolve_category(db, data.category)
        tags = await tag_service.resolve_tags(db, data.tags)

        if not data.ingredients:
            logger.warning("Recipe created without ingredients", title=data.title)

        recipe = Recipe(
            title=data.title,
            ingredients=list(data.ingredients),
            instructions=data.instructions,
            category=category,
            tags=tags,
        )
        db.add(recipe)
        await db.commit()

        logger.info("Recipe created", recipe_id=recipe.id, category_id=category.id)
        return recipe

    async def update_recipe(
        self, db: AsyncSession, recipe_id: str, data: RecipeUpdate
    ) -> Recipe:
        """Apply only the supplied fields; references are re-validated when given"""
        recipe = await self.get_recipe(db, recipe_id)
        changes = data.changes()

        if "category" in changes:
            recipe.category = await self._resolve_category(db, changes.pop("category"))
        if "tags" in changes:
            recipe.tags = await tag_service.resolve_tags(db, changes.pop("tags"))
        if "ingredients" in changes and not changes["ingredients"]:
            logger.warning("Recipe updated without ingredients", recipe_id=recipe.id)

        for field, value in changes.items():
            setattr(recipe, field, value)
        recipe.updated_at = utcnow()
        await db.commit()

        logger.info("Recipe updated", recipe_id=recipe.id, fields=sorted(data.changes()))
        return recipe

    async def delete_recipe(self, db: AsyncSession, recipe_id: str) -> Recipe:
        recipe = await self.get_recipe(db, recipe_id)
        await db.delete(recipe)
        await db.commit()

        logger.info("Recipe deleted", recipe_id=recipe_id)
        return recipe

    async def rate_recipe(self, db: AsyncSession, recipe_id: str, rating: int) -> Recipe:
        """
        Record one rating

        The running average is kept as a sum and a count, incremented in a
        single UPDATE so concurrent ratings are never lost.
        """
        if isinstance(rating, bool) or not isinstance(rating, int):
            raise ValidationError("Rating must be a whole number")
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")

        recipe = await self.get_recipe(db, recipe_id)

        await db.execute(
            update(Recipe)
            .where(Recipe.id == recipe.id)
            .values(
                rating_sum=Recipe.rating_sum + rating,
                total_ratings=Recipe.total_ratings + 1,
            )
            .execution_options(synchronize_session=False)
        )
        await db.commit()
        await db.refresh(recipe, attribute_names=["rating_sum", "total_ratings"])

        logger.info(
            "Recipe rated",
            recipe_id=recipe.id,
            rating=rating,
            average=recipe.rating,
            total_ratings=recipe.total_ratings,
        )
        return recipe

    def _ingredient_matches(self, db: AsyncSession, query: str):
        """EXISTS clause matching ``query`` against each ingredient entry"""
        if db.get_bind().dialect.name == "postgresql":
            entries = func.json_array_elements_text(Recipe.ingredients)
        else:
            entries = func.json_each(Recipe.ingredients)
        entry = entries.table_valued(column("value", String))

        return (
            select(entry.c.value)
            .where(entry.c.value.icontains(query, autoescape=True))
            .exists()
        )

    async def _resolve_category(self, db: AsyncSession, reference: str):
        try:
            return await category_service.find_category(db, reference)
        except NotFoundError:
            raise ValidationError(f"Category '{reference}' does not exist") from None


recipe_service = RecipeService()
