"""
Import all models to ensure they are registered with SQLAlchemy
"""
from app.models.user import User
from app.models.genre import Genre
from app.models.movie import Movie, MovieAvailability
from app.models.saved_movie import SavedMovie

__all__ = [
    "User",
    "Genre",
    "Movie",
    "MovieAvailability",
    "SavedMovie",
]
