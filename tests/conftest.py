import pytest
from typing import Generator
from fastapi.testclient import TestClient

# It is important to set environment variables before importing app modules
import os
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

from app import models
from app.db.session import Base, SessionLocal, engine
from app.main import app


@pytest.fixture(scope="session", autouse=True)
def db_engine():
    # Create tables
    Base.metadata.create_all(bind=engine)
    yield engine
    # Drop tables
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if os.path.exists("./test.db"):
        os.remove("./test.db")


@pytest.fixture(autouse=True)
def clean_tables(db_engine):
    yield
    # API calls commit through their own sessions, so wipe rows between tests
    with db_engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())


@pytest.fixture(scope="function")
def db(db_engine) -> Generator:
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="module")
def client() -> Generator:
    with TestClient(app) as c:
        yield c


@pytest.fixture
def user(db):
    db_user = models.User(username="chef")
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


@pytest.fixture
def pantry(db):
    """
    Two ingredients and two metrics, keyed by name.
    """
    flour = models.Ingredient(ingredient="flour")
    milk = models.Ingredient(ingredient="milk")
    grams = models.Metric(metric="g")
    cups = models.Metric(metric="cup")
    db.add_all([flour, milk, grams, cups])
    db.commit()
    return {
        "flour": flour.id,
        "milk": milk.id,
        "g": grams.id,
        "cup": cups.id,
    }
