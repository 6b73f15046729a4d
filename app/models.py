# models.py
# Defines the SQLAlchemy ORM models for the database tables.

from sqlalchemy import (
    Boolean, Column, ForeignKey, Integer, String, Text, DateTime, Float, func
)
from sqlalchemy.orm import relationship
from app.db.session import Base


class User(Base):
    """
    User model for the 'users' table.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)

    recipes = relationship("Recipe", back_populates="user")


class Recipe(Base):
    """
    Recipe model for the 'recipes' table.
    """
    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    title = Column(String, nullable=False)
    # Not unique: the random suffix only makes collisions unlikely
    slug = Column(String, index=True, nullable=False)
    description = Column(Text, nullable=True)
    cover_image = Column(String, nullable=True)
    public = Column(Boolean, default=True, nullable=False)
    estimated_time = Column(Integer, nullable=True)

    # Audit
    created_at = Column(DateTime, default=func.now(), index=True)
    edited_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # Relationships
    user = relationship("User", back_populates="recipes")

    recipe_steps = relationship(
        "RecipeStep", back_populates="recipe", order_by="RecipeStep.position",
        passive_deletes=True,
    )
    recipe_has_ingredients = relationship(
        "RecipeHasIngredient", back_populates="recipe", passive_deletes=True
    )
    recipe_has_tags = relationship(
        "RecipeHasTag", back_populates="recipe", passive_deletes=True
    )
    recipe_comments = relationship(
        "RecipeComment", back_populates="recipe", order_by="RecipeComment.created_at",
        passive_deletes=True,
    )


class RecipeStep(Base):
    """
    An ordered instruction step for a recipe.
    """
    __tablename__ = "recipe_steps"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    position = Column(Integer, nullable=False)
    content = Column(Text, nullable=False)

    recipe = relationship("Recipe", back_populates="recipe_steps")


class Ingredient(Base):
    """
    Lookup table of ingredient names.
    """
    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, index=True)
    ingredient = Column(String, unique=True, index=True, nullable=False)


class Metric(Base):
    """
    Lookup table of measuring units.
    """
    __tablename__ = "metrics"

    id = Column(Integer, primary_key=True, index=True)
    metric = Column(String, unique=True, index=True, nullable=False)


class RecipeHasIngredient(Base):
    """
    Association object between Recipe, Ingredient and Metric, carrying the amount.
    """
    __tablename__ = "recipe_has_ingredients"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    ingredient_id = Column(Integer, ForeignKey("ingredients.id"), nullable=False, index=True)
    metric_id = Column(Integer, ForeignKey("metrics.id"), nullable=False, index=True)
    amount = Column(Float, nullable=False)

    recipe = relationship("Recipe", back_populates="recipe_has_ingredients")
    ingredient = relationship("Ingredient")
    metric = relationship("Metric")


class Tag(Base):
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, index=True, nullable=False)


class RecipeHasTag(Base):
    __tablename__ = "recipe_has_tags"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    tag_id = Column(Integer, ForeignKey("tags.id"), nullable=False, index=True)

    recipe = relationship("Recipe", back_populates="recipe_has_tags")
    tag = relationship("Tag")


class RecipeComment(Base):
    """
    A user comment on a recipe. There is no write path in the API yet.
    """
    __tablename__ = "recipe_comments"

    id = Column(Integer, primary_key=True, index=True)
    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    body = Column(Text, nullable=False)
    created_at = Column(DateTime, default=func.now())

    recipe = relationship("Recipe", back_populates="recipe_comments")
