from sqlalchemy.orm import Session
from typing import List, Tuple

from app.models.genre import Genre
from app.utils.pagination import Pagination


class GenreService:
    """Read-only access to the genre reference table"""

    @staticmethod
    def list_genres(db: Session, pagination: Pagination) -> Tuple[List[Genre], int]:
        """Genres ordered by name, with the unpaginated total"""
        total = db.query(Genre).count()
        genres = (
            db.query(Genre)
            .order_by(Genre.name.asc(), Genre.id.asc())
            .offset(pagination.offset)
            .limit(pagination.limit)
            .all()
        )
        return genres, total
