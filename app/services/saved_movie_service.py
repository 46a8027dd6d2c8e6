from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import func
from typing import List, Tuple
from uuid import UUID
from datetime import datetime, timezone
import logging

from app.models.movie import Movie, MovieAvailability
from app.models.saved_movie import SavedMovie
from app.schemas.filters import SavedMovieFilter
from app.utils.errors import DuplicateSave, NotSaved
from app.utils.pagination import Pagination

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation on PostgreSQL
UNIQUE_VIOLATION = "23505"


def _is_duplicate_save(exc: IntegrityError) -> bool:
    """True when the failed insert hit the (user_id, movie_id) key rather than a foreign key"""
    orig = exc.orig
    if getattr(orig, "pgcode", None) == UNIQUE_VIOLATION:
        return True
    message = str(orig)
    return "UNIQUE constraint failed" in message or "unique_user_movie_saved" in message


class SavedMovieService:
    """Service for a user's saved ("watch later") movies"""

    @staticmethod
    def list_saved_movies(
        db: Session,
        user_id: UUID,
        saved_filter: SavedMovieFilter,
        pagination: Pagination,
    ) -> Tuple[List[Tuple[Movie, datetime]], int]:
        """
        Saved movies for one user that are watchable in the given country.

        Saved movies without an availability row for that country are left
        out of both the page and the total.
        Returns (movie, date_added) pairs.
        """
        base = (
            db.query(Movie, SavedMovie.date_added)
            .join(SavedMovie, SavedMovie.movie_id == Movie.id)
            .join(MovieAvailability, MovieAvailability.movie_id == Movie.id)
            .filter(
                SavedMovie.user_id == user_id,
                MovieAvailability.country_code == saved_filter.country_code.upper(),
            )
        )

        total = base.with_entities(func.count(func.distinct(SavedMovie.movie_id))).scalar() or 0

        if saved_filter.sort.descending:
            ordering = (SavedMovie.date_added.desc(), Movie.id.desc())
        else:
            ordering = (SavedMovie.date_added.asc(), Movie.id.asc())

        rows = (
            base.order_by(*ordering)
            .offset(pagination.offset)
            .limit(pagination.limit)
            .all()
        )
        return [(movie, date_added) for movie, date_added in rows], total

    @staticmethod
    def is_saved(db: Session, user_id: UUID, movie_id: UUID) -> bool:
        """Check whether the user already saved this movie"""
        exists = db.query(SavedMovie).filter(
            SavedMovie.user_id == user_id,
            SavedMovie.movie_id == movie_id,
        ).exists()
        return bool(db.query(exists).scalar())

    @staticmethod
    def save_movie(db: Session, user_id: UUID, movie_id: UUID) -> SavedMovie:
        """
        Save a movie for a user.

        The caller has already checked that the movie exists and is available
        in the requested country. The existence pre-check here can lose a race
        with a concurrent save; the unique constraint catches that case and it
        is reported as DUPLICATE_SAVE as well. Other integrity
        errors, such as the user being deleted mid-request, propagate.
        """
        if SavedMovieService.is_saved(db, user_id, movie_id):
            raise DuplicateSave()

        saved = SavedMovie(
            user_id=user_id,
            movie_id=movie_id,
            date_added=datetime.now(timezone.utc),
        )
        db.add(saved)
        try:
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            if not _is_duplicate_save(exc):
                raise
            logger.info(f"Concurrent duplicate save for user {user_id}, movie {movie_id}")
            raise DuplicateSave()
        db.refresh(saved)

        logger.info(f"User {user_id} saved movie {movie_id}")
        return saved

    @staticmethod
    def remove_saved_movie(db: Session, user_id: UUID, movie_id: UUID) -> None:
        """Remove a saved movie; NOT_SAVED when nothing was deleted"""
        deleted = db.query(SavedMovie).filter(
            SavedMovie.user_id == user_id,
            SavedMovie.movie_id == movie_id,
        ).delete(synchronize_session=False)

        if deleted == 0:
            db.rollback()
            raise NotSaved()

        db.commit()
        logger.info(f"User {user_id} removed saved movie {movie_id}")
