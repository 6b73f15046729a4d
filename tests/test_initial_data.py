from app import models
from app.core.config import settings
from app.initial_data import DEFAULT_INGREDIENTS, DEFAULT_METRICS, init_db


def test_init_db_is_idempotent(db):
    init_db(db)
    init_db(db)

    users = db.query(models.User).all()
    assert [u.username for u in users] == [settings.SEED_USERNAME]
    assert db.query(models.Metric).count() == len(DEFAULT_METRICS)
    assert db.query(models.Ingredient).count() == len(DEFAULT_INGREDIENTS)
