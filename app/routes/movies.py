from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.schemas.common import PagedResponse
from app.schemas.movie import MovieResponse, MovieDetailResponse
from app.services.movie_service import MovieService
from app.utils.filters import build_movie_filter, parse_uuid
from app.utils.pagination import resolve_pagination, build_paged_response

router = APIRouter(prefix="/movies", tags=["Movies"])


# ============================================
# Catalog listing
# ============================================

@router.get("", response_model=PagedResponse[MovieResponse])
def list_movies(
    page: Optional[str] = Query(None, description="Page number (default 1)"),
    page_size: Optional[str] = Query(None, description="Items per page (default 20, max 100)"),
    country: Optional[str] = Query(None, description="Only movies available in this country (ISO 3166-1 alpha-2)"),
    genre: Optional[str] = Query(None, description="Genre UUID"),
    sort: Optional[str] = Query(None, description="'year' or '-year' (default)"),
    db: Session = Depends(get_db)
):
    """
    Browse the catalog

    **Filters** (combined with AND):
    - country: case-insensitive, e.g. "us" or "US"
    - genre: exact genre match

    **Sort**: year ascending (`year`) or descending (`-year`)
    """
    pagination = resolve_pagination(page, page_size)
    movie_filter = build_movie_filter(genre=genre, country=country, sort=sort)

    movies, total = MovieService.list_movies(db, movie_filter, pagination)
    return build_paged_response(
        [MovieResponse.model_validate(movie) for movie in movies], total, pagination
    )


# ============================================
# Movie Details (dynamic route)
# ============================================

@router.get("/{movie_id}", response_model=MovieDetailResponse)
def get_movie(movie_id: str, db: Session = Depends(get_db)):
    """Get movie details by ID"""
    parsed_id = parse_uuid(movie_id, "INVALID_MOVIE_ID", "Invalid movie ID format")
    return MovieService.get_movie(db, parsed_id)
