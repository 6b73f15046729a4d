# crud.py
# Contains the functions for Create, Read, Update, Delete (CRUD) operations.

import logging
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload, selectinload

from app import models
from app import schemas
from app.db.session import SQL_INT_MAX
from app.helpers import generate_random_string, slug_generator

# Get a logger instance
logger = logging.getLogger(__name__)

# Used when a title has no characters that survive slugging
DEFAULT_SLUG = "recipe"


def fits_sql_integer(value: int) -> bool:
    return -SQL_INT_MAX - 1 <= value <= SQL_INT_MAX


# --- User CRUD Functions ---
def get_user(db: Session, user_id: int):
    if not fits_sql_integer(user_id):
        return None
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_username(db: Session, username: str):
    """
    Case-insensitive username lookup.
    """
    return (
        db.query(models.User)
        .filter(func.lower(models.User.username) == username.lower())
        .first()
    )


def create_user(db: Session, username: str):
    db_user = models.User(username=username)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


# --- Lookup table CRUD Functions ---
def get_or_create_ingredient(db: Session, name: str):
    ingredient = db.query(models.Ingredient).filter(models.Ingredient.ingredient == name).first()
    if not ingredient:
        ingredient = models.Ingredient(ingredient=name)
        db.add(ingredient)
        db.commit()
        db.refresh(ingredient)
    return ingredient


def get_or_create_metric(db: Session, name: str):
    metric = db.query(models.Metric).filter(models.Metric.metric == name).first()
    if not metric:
        metric = models.Metric(metric=name)
        db.add(metric)
        db.commit()
        db.refresh(metric)
    return metric


# --- Tag CRUD Functions ---
def upsert_tags(db: Session, names: List[str]) -> List[models.Tag]:
    """
    Find each tag by name, creating the ones that do not exist yet.
    Blank names are skipped and repeated names resolve to a single tag.
    """
    tags = []
    seen = set()
    for raw_name in names:
        name = raw_name.strip()
        if not name or name in seen:
            continue
        seen.add(name)

        tag = db.query(models.Tag).filter(models.Tag.name == name).first()
        if not tag:
            logger.debug(f"Creating tag '{name}'")
            tag = models.Tag(name=name)
            db.add(tag)
            db.commit()
            db.refresh(tag)
        tags.append(tag)
    return tags


def create_recipe_tags(db: Session, recipe: models.Recipe, tags: List[models.Tag]):
    links = [models.RecipeHasTag(recipe_id=recipe.id, tag_id=tag.id) for tag in tags]
    db.add_all(links)
    db.commit()
    return links


# --- Step CRUD Functions ---
def create_recipe_steps(db: Session, recipe: models.Recipe, steps: List[schemas.RecipeStepCreate]):
    """
    Bulk-create the steps of a recipe. Position defaults to the list order.
    """
    db_steps = [
        models.RecipeStep(
            recipe_id=recipe.id,
            position=step.position if step.position is not None else index,
            content=step.content,
        )
        for index, step in enumerate(steps, start=1)
    ]
    db.add_all(db_steps)
    db.commit()
    return db_steps


# --- Ingredient join CRUD Functions ---
def create_recipe_ingredients(
        db: Session, recipe: models.Recipe, ingredients: List[schemas.RecipeIngredientCreate]
):
    """
    Persist one join row per complete ingredient line.

    Lines missing an ingredient, a metric or an amount, or whose ids cannot
    exist in the database, are dropped. Every row is committed on its own;
    a row that fails is rolled back and logged and the remaining rows are
    still written.
    """
    valid_ingredients = [
        line for line in ingredients
        if line.is_complete()
        and fits_sql_integer(line.ingredient_id)
        and fits_sql_integer(line.metric_id)
    ]
    dropped = len(ingredients) - len(valid_ingredients)
    if dropped:
        logger.debug(f"Dropping {dropped} incomplete ingredient line(s) for recipe {recipe.id}")

    saved = []
    for line in valid_ingredients:
        db_link = models.RecipeHasIngredient(
            recipe_id=recipe.id,
            ingredient_id=line.ingredient_id,
            metric_id=line.metric_id,
            amount=line.amount,
        )
        try:
            db.add(db_link)
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception(
                f"Error saving ingredient {line.ingredient_id} for recipe {recipe.id}"
            )
            continue
        saved.append(db_link)
    return saved


# --- Recipe CRUD Functions ---
def create_user_recipe(db: Session, recipe: schemas.RecipeCreate, user: models.User):
    """
    Create and commit the recipe row only. Steps, tags and ingredients are
    written afterwards by their own helpers, each with its own commit.
    """
    logger.debug(f"Creating recipe: {recipe.title!r} for user {user.id}")
    now = datetime.now(timezone.utc)

    db_recipe = models.Recipe(
        user_id=user.id,
        title=f"{recipe.title.strip()}{generate_random_string()}",
        slug=f"{slug_generator(recipe.slug or recipe.title) or DEFAULT_SLUG}-{generate_random_string()}",
        description=recipe.description,
        cover_image=recipe.cover_image,
        public=True if recipe.public is None else recipe.public,
        estimated_time=recipe.estimated_time,
        created_at=recipe.created_at or now,
        edited_at=now,
    )
    db.add(db_recipe)
    db.commit()
    db.refresh(db_recipe)
    return db_recipe


def get_user_recipe_by_slug(db: Session, user_id: int, slug: str) -> Optional[models.Recipe]:
    """
    Retrieve a single recipe owned by the user, with its steps, comments,
    ingredient joins (and their lookup rows) and tag joins.
    Slugs are not unique; the lowest id wins.
    """
    logger.debug(f"Retrieving recipe with slug {slug} for user {user_id}")
    return (
        db.query(models.Recipe)
        .options(
            selectinload(models.Recipe.recipe_steps),
            selectinload(models.Recipe.recipe_has_ingredients).joinedload(models.RecipeHasIngredient.ingredient),
            selectinload(models.Recipe.recipe_has_ingredients).joinedload(models.RecipeHasIngredient.metric),
            selectinload(models.Recipe.recipe_comments),
            selectinload(models.Recipe.recipe_has_tags).joinedload(models.RecipeHasTag.tag),
        )
        .filter(models.Recipe.user_id == user_id)
        .filter(models.Recipe.slug == slug)
        .order_by(models.Recipe.id)
        .first()
    )


def get_recent_recipes(db: Session, skip: int = 0, take: int = 20):
    """
    Retrieve a page of recipes, newest first, with author and tags loaded.
    """
    logger.debug(f"Retrieving recent recipes skipping {skip}, taking {take}")
    return (
        db.query(models.Recipe)
        .options(
            joinedload(models.Recipe.user),
            selectinload(models.Recipe.recipe_has_tags).joinedload(models.RecipeHasTag.tag),
        )
        .order_by(models.Recipe.created_at.desc(), models.Recipe.id.desc())
        .offset(skip)
        .limit(take)
        .all()
    )


def delete_recipe(db: Session, recipe_id: int) -> int:
    """
    Delete a recipe by id without checking that it exists first.
    Returns the number of rows removed; child rows go with it through the
    foreign keys' ON DELETE CASCADE.
    """
    if not fits_sql_integer(recipe_id):
        logger.debug(f"Recipe id {recipe_id} is out of range - nothing to delete")
        return 0
    affected = (
        db.query(models.Recipe)
        .filter(models.Recipe.id == recipe_id)
        .delete(synchronize_session=False)
    )
    db.commit()
    if affected:
        logger.debug(f"Deleted recipe {recipe_id}")
    else:
        logger.debug(f"Recipe {recipe_id} not found - nothing to delete")
    return affected
