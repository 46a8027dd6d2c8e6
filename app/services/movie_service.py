from sqlalchemy.orm import Session
from sqlalchemy import func
from typing import List, Tuple
from uuid import UUID

from app.models.movie import Movie, MovieAvailability
from app.schemas.filters import MovieFilter
from app.utils.errors import MovieNotFound
from app.utils.pagination import Pagination


class MovieService:
    """Catalog queries: listing, lookup and country availability"""

    @staticmethod
    def _filtered_query(db: Session, movie_filter: MovieFilter):
        """
        Base query shared by the page and the count so both see the same predicate.
        A country filter is an inner join: movies with no availability row
        in that country drop out entirely.
        """
        query = db.query(Movie)

        if movie_filter.country_code:
            query = query.join(
                MovieAvailability, MovieAvailability.movie_id == Movie.id
            ).filter(MovieAvailability.country_code == movie_filter.country_code.upper())

        if movie_filter.genre_id is not None:
            query = query.filter(Movie.genre_id == movie_filter.genre_id)

        return query

    @staticmethod
    def list_movies(
        db: Session,
        movie_filter: MovieFilter,
        pagination: Pagination,
    ) -> Tuple[List[Movie], int]:
        """
        List distinct movies matching the filter, sorted by year.

        Ties on year are broken by id in the same direction, so "year" is
        always the exact reverse of "-year".
        """
        base = MovieService._filtered_query(db, movie_filter)

        total = base.with_entities(func.count(func.distinct(Movie.id))).scalar() or 0

        if movie_filter.sort.descending:
            ordering = (Movie.year.desc(), Movie.id.desc())
        else:
            ordering = (Movie.year.asc(), Movie.id.asc())

        movies = (
            base.distinct()
            .order_by(*ordering)
            .offset(pagination.offset)
            .limit(pagination.limit)
            .all()
        )
        return movies, total

    @staticmethod
    def get_movie(db: Session, movie_id: UUID) -> Movie:
        """Get a movie by id, MOVIE_NOT_FOUND if absent"""
        movie = db.query(Movie).filter(Movie.id == movie_id).first()
        if not movie:
            raise MovieNotFound()
        return movie

    @staticmethod
    def is_available_in_country(db: Session, movie_id: UUID, country_code: str) -> bool:
        """True when an availability row exists for (movie, country)"""
        exists = db.query(MovieAvailability).filter(
            MovieAvailability.movie_id == movie_id,
            MovieAvailability.country_code == country_code.strip().upper(),
        ).exists()
        return bool(db.query(exists).scalar())
