# schemas.py
# Defines the Pydantic models (schemas) for data validation and serialization.

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from typing import List, Optional, Any
from datetime import datetime

from app.db.session import SQL_INT_MAX


class CamelModel(BaseModel):
    """
    Base schema: snake_case attributes, camelCase JSON.
    """
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


# --- Step Schemas ---
class RecipeStepCreate(CamelModel):
    content: str
    position: Optional[int] = Field(default=None, ge=0, le=SQL_INT_MAX)

    @model_validator(mode='before')
    @classmethod
    def accept_plain_text(cls, data: Any) -> Any:
        # Steps may be posted as bare strings
        if isinstance(data, str):
            return {"content": data}
        return data


class RecipeStep(CamelModel):
    id: int
    recipe_id: int
    position: int
    content: str


# --- Ingredient Schemas ---
class RecipeIngredientCreate(CamelModel):
    # All optional: incomplete lines are dropped rather than rejected
    ingredient_id: Optional[int] = None
    metric_id: Optional[int] = None
    amount: Optional[float] = None

    def is_complete(self) -> bool:
        return bool(self.ingredient_id and self.metric_id and self.amount)


class RecipeIngredient(CamelModel):
    id: int
    recipe_id: int
    ingredient_id: int
    metric_id: int
    amount: float
    ingredient: Optional[str] = None
    metric: Optional[str] = None

    @model_validator(mode='before')
    @classmethod
    def flatten_lookups(cls, data: Any) -> Any:
        if hasattr(data, "ingredient_id"):  # Is an ORM object
            return {
                "id": data.id,
                "recipe_id": data.recipe_id,
                "ingredient_id": data.ingredient_id,
                "metric_id": data.metric_id,
                "amount": data.amount,
                "ingredient": data.ingredient.ingredient if data.ingredient else None,
                "metric": data.metric.metric if data.metric else None,
            }
        return data


# --- Tag Schemas ---
class Tag(CamelModel):
    id: int
    name: str


# --- Comment Schemas ---
class RecipeComment(CamelModel):
    id: int
    recipe_id: int
    user_id: int
    body: str
    created_at: Optional[datetime] = None


# --- Recipe Schemas ---
class RecipeCreate(CamelModel):
    user_id: int
    title: str
    slug: Optional[str] = None
    description: Optional[str] = None
    cover_image: Optional[str] = None
    public: Optional[bool] = None
    estimated_time: Optional[int] = Field(default=None, ge=0, le=SQL_INT_MAX)
    created_at: Optional[datetime] = None

    steps: Optional[List[RecipeStepCreate]] = None
    tags: Optional[List[str]] = None
    ingredients: Optional[List[RecipeIngredientCreate]] = None


class Recipe(CamelModel):
    id: int
    user_id: int
    title: str
    slug: str
    description: Optional[str] = None
    cover_image: Optional[str] = None
    public: bool
    estimated_time: Optional[int] = None
    created_at: Optional[datetime] = None
    edited_at: Optional[datetime] = None


class RecipeCreateResult(BaseModel):
    msg: str
    recipe: Optional[Recipe] = None


class RecipeDetail(Recipe):
    """
    Full recipe view: the join collections are replaced by flat
    ``tags`` and ``ingredients`` lists.
    """
    recipe_steps: List[RecipeStep] = []
    recipe_comments: List[RecipeComment] = []
    tags: List[Tag] = []
    ingredients: List[RecipeIngredient] = []

    @model_validator(mode='before')
    @classmethod
    def transform_from_orm(cls, data: Any) -> Any:
        if hasattr(data, "recipe_has_tags"):  # Is an ORM object
            return {
                **_recipe_columns(data),
                "recipe_steps": data.recipe_steps,
                "recipe_comments": data.recipe_comments,
                "tags": [link.tag for link in data.recipe_has_tags if link.tag],
                "ingredients": data.recipe_has_ingredients,
            }
        return data


class RecipeSummary(Recipe):
    author: Optional[str] = None
    tags: List[Tag] = []

    @model_validator(mode='before')
    @classmethod
    def transform_from_orm(cls, data: Any) -> Any:
        if hasattr(data, "recipe_has_tags"):  # Is an ORM object
            return {
                **_recipe_columns(data),
                "author": data.user.username if data.user else None,
                "tags": [link.tag for link in data.recipe_has_tags if link.tag],
            }
        return data


class RecentRecipes(BaseModel):
    recipes: List[RecipeSummary]


# --- Delete Schemas ---
class DeleteResult(BaseModel):
    raw: List[Any] = []
    affected: int


class RecipeDeleteResponse(BaseModel):
    result: DeleteResult


def _recipe_columns(data: Any) -> dict:
    return {
        "id": data.id,
        "user_id": data.user_id,
        "title": data.title,
        "slug": data.slug,
        "description": data.description,
        "cover_image": data.cover_image,
        "public": data.public,
        "estimated_time": data.estimated_time,
        "created_at": data.created_at,
        "edited_at": data.edited_at,
    }
