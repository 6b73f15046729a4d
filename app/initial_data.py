import logging
from sqlalchemy.orm import Session

from app import crud, models
from app.db.session import SessionLocal, engine
from app.core.config import settings

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

DEFAULT_METRICS = ["g", "kg", "ml", "l", "tsp", "tbsp", "cup", "piece", "pinch"]
DEFAULT_INGREDIENTS = [
    "flour", "sugar", "salt", "butter", "egg", "milk", "water", "olive oil", "onion", "garlic",
]


def init_db(db: Session) -> None:
    # Check if the seed user exists
    user = crud.get_user_by_username(db, username=settings.SEED_USERNAME)
    if user:
        logger.info(f"User {settings.SEED_USERNAME} already exists.")
    else:
        logger.info(f"Creating user {settings.SEED_USERNAME}...")
        crud.create_user(db, username=settings.SEED_USERNAME)
        logger.info("User created successfully.")

    for name in DEFAULT_METRICS:
        crud.get_or_create_metric(db, name)
    for name in DEFAULT_INGREDIENTS:
        crud.get_or_create_ingredient(db, name)
    logger.info(f"Seeded {len(DEFAULT_METRICS)} metrics and {len(DEFAULT_INGREDIENTS)} ingredients.")


def main() -> None:
    models.Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        init_db(db)
    finally:
        db.close()

if __name__ == "__main__":
    main()
