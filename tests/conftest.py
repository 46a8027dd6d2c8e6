import os

# Point the app at SQLite before app.database builds its engine
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.main import app
from app.models.genre import Genre
from app.models.movie import Movie, MovieAvailability

SQLALCHEMY_DATABASE_URL = "sqlite://"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    """Provide a clean database session for each test."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(db_session):
    """FastAPI test client with the database dependency overridden."""

    def override_get_db():
        test_db = TestingSessionLocal()
        try:
            yield test_db
        finally:
            test_db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.pop(get_db, None)


def create_movie(session, title, year, genre=None, countries=()):
    movie = Movie(title=title, year=year, genre_id=genre.id if genre else None)
    movie.availability = [MovieAvailability(country_code=code) for code in countries]
    session.add(movie)
    session.commit()
    session.refresh(movie)
    return movie


@pytest.fixture
def catalog(db_session):
    """
    Small catalog:
        drama:  Old Drama (1990, US), Mid Drama (2005, US+GB), New Drama (2020, GB)
        comedy: Comedy (2010, US+CA)
        no genre: Orphan (2000, nowhere)
    """
    drama = Genre(name="Drama")
    comedy = Genre(name="Comedy")
    db_session.add_all([drama, comedy])
    db_session.commit()

    movies = {
        "old_drama": create_movie(db_session, "Old Drama", 1990, drama, ["US"]),
        "mid_drama": create_movie(db_session, "Mid Drama", 2005, drama, ["US", "GB"]),
        "new_drama": create_movie(db_session, "New Drama", 2020, drama, ["GB"]),
        "comedy": create_movie(db_session, "Comedy", 2010, comedy, ["US", "CA"]),
        "orphan": create_movie(db_session, "Orphan", 2000),
    }
    return {"genres": {"drama": drama, "comedy": comedy}, "movies": movies}


@pytest.fixture
def registered_user(client):
    """Register through the API; returns {user_id, api_key}"""
    response = client.post("/register", json={"name": "A", "date_of_birth": "2000-01-01"})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def auth_headers(registered_user):
    return {"X-API-Key": registered_user["api_key"]}
