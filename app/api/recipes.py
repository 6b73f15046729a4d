# api/recipes.py
# Handles all API endpoints related to recipes.

import logging
from typing import Optional
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

# Import local modules
from app import crud
from app import schemas
from app.core.config import settings
from app.core.rate_limit import limiter
from app.db.session import SQL_INT_MAX, get_db

# Create an API router
router = APIRouter()

# Get a logger instance
logger = logging.getLogger(__name__)


def parse_int(
        value: Optional[str], default: int, minimum: int = 0, maximum: int = SQL_INT_MAX
) -> int:
    """
    Parse a base-10 query value, falling back to ``default`` when it is
    absent, not a number, or below ``minimum``. Values above ``maximum``
    are clamped to it.
    """
    if value is None:
        return default
    try:
        parsed = int(value.strip(), 10)
    except ValueError:
        return default
    if parsed < minimum:
        return default
    return min(parsed, maximum)


@router.post("/recipe", response_model=schemas.RecipeCreateResult)
@limiter.limit(settings.CREATE_RECIPE_RATE_LIMIT)
def create_recipe(
        request: Request,
        recipe: schemas.RecipeCreate,
        db: Session = Depends(get_db),
):
    """
    Create a recipe with its steps, tags and ingredients.

    An unknown userId is answered with 200 and a message, not 404. The
    children are written after the recipe is committed, so a failure there
    leaves a partially populated recipe behind.
    """
    user = crud.get_user(db, user_id=recipe.user_id)
    if user is None:
        logger.warning(f"User with ID {recipe.user_id} not found, recipe not created.")
        return JSONResponse(status_code=200, content={"msg": "Couldn't find user with that id"})

    try:
        db_recipe = crud.create_user_recipe(db=db, recipe=recipe, user=user)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Error saving recipe")
        return JSONResponse(status_code=400, content={"msg": "Error saving recipe", "recipe": None})

    # Snapshot before the children are written
    saved_recipe = schemas.Recipe.model_validate(db_recipe)

    if recipe.steps:
        crud.create_recipe_steps(db, recipe=db_recipe, steps=recipe.steps)

    recipe_tags = crud.upsert_tags(db, names=recipe.tags) if recipe.tags else []
    if recipe_tags:
        crud.create_recipe_tags(db, recipe=db_recipe, tags=recipe_tags)

    if recipe.ingredients:
        crud.create_recipe_ingredients(db, recipe=db_recipe, ingredients=recipe.ingredients)

    logger.debug(f"Recipe {saved_recipe.id} created with slug {saved_recipe.slug}")
    return schemas.RecipeCreateResult(msg="No errors", recipe=saved_recipe)


@router.get(
    "/recipe/{username}/{slug}",
    response_model=schemas.RecipeDetail,
    responses={404: {"description": "User or recipe not found"}},
)
def read_recipe(
        username: str,
        slug: str,
        db: Session = Depends(get_db),
):
    """
    Retrieve a single recipe by its author's username and its slug.
    """
    user = crud.get_user_by_username(db, username=username)
    if user is None:
        logger.warning(f"User {username} not found.")
        return JSONResponse(status_code=404, content={"msg": "User not found"})

    db_recipe = crud.get_user_recipe_by_slug(db, user_id=user.id, slug=slug)
    if db_recipe is None:
        logger.warning(f"Recipe {slug} not found for user {username}.")
        return JSONResponse(status_code=404, content={"msg": "Recipe not found"})
    return db_recipe


@router.get("/recipes/recent", response_model=schemas.RecentRecipes)
def read_recent_recipes(
        take: Optional[str] = None,
        skip: Optional[str] = None,
        db: Session = Depends(get_db),
):
    """
    Retrieve a page of recipes, newest first. Non-numeric ``take``/``skip``
    values fall back to the defaults.
    """
    take_count = min(
        parse_int(take, settings.RECENT_RECIPES_DEFAULT_TAKE, minimum=1),
        settings.RECENT_RECIPES_MAX_TAKE,
    )
    skip_count = parse_int(skip, 0)
    logger.debug(f"Fetching recent recipes with skip={skip_count}, take={take_count}.")
    recipes = crud.get_recent_recipes(db, skip=skip_count, take=take_count)
    return {"recipes": recipes}


@router.delete("/recipe/{recipe_id}", response_model=schemas.RecipeDeleteResponse)
def delete_recipe(
        recipe_id: int,
        db: Session = Depends(get_db),
):
    """
    Delete a recipe by id. Succeeds even when no row matched.
    """
    logger.debug(f"Deleting recipe with ID: {recipe_id}")
    affected = crud.delete_recipe(db=db, recipe_id=recipe_id)
    return {"result": {"raw": [], "affected": affected}}
