"""
Recipe Catalog Recipe Models
Database models for recipes, categories and tags
"""

from sqlalchemy import Column, Integer, String, Text, ForeignKey, JSON, Table
from sqlalchemy.orm import relationship
from datetime import datetime, timezone
import uuid

from core.database import Base, UTCDateTime


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


recipe_tags = Table(
    "recipe_tags",
    Base.metadata,
    Column("recipe_id", String(36), ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", String(36), ForeignKey("tags.id"), primary_key=True),
)


class Category(Base):
    """Recipe category, referenced by exactly one field on each recipe"""
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(Text)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f"<Category(id={self.id}, name={self.name})>"


class Tag(Base):
    """Free-form label attached to any number of recipes"""
    __tablename__ = "tags"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), unique=True, nullable=False, index=True)
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f"<Tag(id={self.id}, name={self.name})>"


class Recipe(Base):
    """Recipe model for storing recipe information"""
    __tablename__ = "recipes"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(255), nullable=False)
    ingredients = Column(JSON, nullable=False, default=list)  # ordered list of strings
    instructions = Column(Text, nullable=False)

    category_id = Column(String(36), ForeignKey("categories.id"), nullable=False, index=True)
    category = relationship("Category", lazy="selectin")
    tags = relationship("Tag", secondary=recipe_tags, lazy="selectin", order_by="Tag.name")

    # Ratings: running average derived from sum and count
    rating_sum = Column(Integer, nullable=False, default=0)
    total_ratings = Column(Integer, nullable=False, default=0)

    # Timestamps
    created_at = Column(UTCDateTime, nullable=False, default=utcnow)
    updated_at = Column(UTCDateTime)

    @property
    def rating(self) -> float:
        if not self.total_ratings:
            return 0.0
        return round(self.rating_sum / self.total_ratings, 2)

    def __repr__(self):
        return f"<Recipe(id={self.id}, title={self.title})>"
