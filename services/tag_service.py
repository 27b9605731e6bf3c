"""
Recipe Catalog Tag Service
CRUD for recipe tags
"""

from typing import List, Sequence
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from core.exceptions import NotFoundError, ValidationError
from models.recipe_models import Tag, recipe_tags
from schemas.recipe_schemas import TagCreate, TagUpdate

logger = structlog.get_logger()


class TagService:

    async def get_tag(self, db: AsyncSession, tag_id: str) -> Tag:
        tag = await db.get(Tag, tag_id)
        if tag is None:
            raise NotFoundError(f"Tag '{tag_id}' does not exist")
        return tag

    async def resolve_tags(self, db: AsyncSession, references: Sequence[str]) -> List[Tag]:
        """
        Resolve tag identifiers or names, dropping duplicates.

        Raises ValidationError naming every reference that matches no tag.
        """
        tags: List[Tag] = []
        missing: List[str] = []
        seen = set()

        for reference in references:
            tag = await db.get(Tag, reference)
            if tag is None:
                result = await db.execute(select(Tag).where(Tag.name == reference))
                tag = result.scalar_one_or_none()
            if tag is None:
                missing.append(reference)
            elif tag.id not in seen:
                seen.add(tag.id)
                tags.append(tag)

        if missing:
            raise ValidationError(f"Unknown tag(s): {', '.join(missing)}")
        return tags

    async def list_tags(self, db: AsyncSession) -> List[Tag]:
        result = await db.execute(select(Tag).order_by(Tag.name))
        return list(result.scalars().all())

    async def create_tag(self, db: AsyncSession, data: TagCreate) -> Tag:
        await self._ensure_unique_name(db, data.name)

        tag = Tag(name=data.name)
        db.add(tag)
        await db.commit()

        logger.info("Tag created", tag_id=tag.id, name=tag.name)
        return tag

    async def update_tag(self, db: AsyncSession, tag_id: str, data: TagUpdate) -> Tag:
        tag = await self.get_tag(db, tag_id)
        changes = data.changes()

        if "name" in changes and changes["name"] != tag.name:
            await self._ensure_unique_name(db, changes["name"])

        for field, value in changes.items():
            setattr(tag, field, value)
        await db.commit()

        logger.info("Tag updated", tag_id=tag.id, fields=sorted(changes))
        return tag

    async def delete_tag(self, db: AsyncSession, tag_id: str) -> Tag:
        """Delete a tag; refused while any recipe still carries it"""
        tag = await self.get_tag(db, tag_id)

        in_use = await db.scalar(
            select(func.count()).select_from(recipe_tags).where(recipe_tags.c.tag_id == tag.id)
        )
        if in_use:
            raise ValidationError(
                f"Tag '{tag.name}' is used by {in_use} recipe(s) and cannot be deleted"
            )

        await db.delete(tag)
        await db.commit()

        logger.info("Tag deleted", tag_id=tag.id)
        return tag

    async def _ensure_unique_name(self, db: AsyncSession, name: str) -> None:
        existing = await db.scalar(select(Tag.id).where(Tag.name == name))
        if existing is not None:
            raise ValidationError(f"Tag '{name}' already exists")


tag_service = TagService()
