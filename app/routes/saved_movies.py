from fastapi import APIRouter, Depends, Query, status
from pydantic import ValidationError
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.models.user import User
from app.schemas.common import PagedResponse
from app.schemas.filters import SavedMovieFilter, SavedMovieSort
from app.schemas.movie import MovieResponse, SavedMovieResponse, SaveMovieRequest
from app.services.movie_service import MovieService
from app.services.saved_movie_service import SavedMovieService
from app.utils.dependencies import get_current_user, get_raw_body, require_path_user
from app.utils.errors import UnavailableInCountry, ValidationFailed
from app.utils.filters import normalize_country_code, parse_sort, parse_uuid
from app.utils.pagination import resolve_pagination, build_paged_response

router = APIRouter(prefix="/users/{user_id}/movies", tags=["Saved Movies"])


def _parse_save_request(raw: bytes) -> SaveMovieRequest:
    """Validate the save payload once the path and query checks have passed"""
    try:
        return SaveMovieRequest.model_validate_json(raw)
    except ValidationError as exc:
        errors = [
            {"loc": [str(part) for part in err.get("loc", ())], "msg": err.get("msg", "")}
            for err in exc.errors()
        ]
        raise ValidationFailed("INVALID_REQUEST", "Invalid request body", {"errors": errors})


@router.get("", response_model=PagedResponse[SavedMovieResponse])
def list_saved_movies(
    user_id: str,
    country: Optional[str] = Query(None, description="Required. Only movies watchable in this country"),
    page: Optional[str] = Query(None, description="Page number (default 1)"),
    page_size: Optional[str] = Query(None, description="Items per page (default 20, max 100)"),
    sort: Optional[str] = Query(None, description="'date_added' or '-date_added' (default)"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    List the user's saved movies

    Saved movies that are not available in **country** are not returned.
    """
    owner_id = require_path_user(user_id, current_user)
    country_code = normalize_country_code(country, required=True)
    pagination = resolve_pagination(page, page_size)
    saved_filter = SavedMovieFilter(country_code=country_code, sort=parse_sort(sort, SavedMovieSort))

    rows, total = SavedMovieService.list_saved_movies(db, owner_id, saved_filter, pagination)
    items = [
        SavedMovieResponse(id=movie.id, title=movie.title, year=movie.year, date_added=date_added)
        for movie, date_added in rows
    ]
    return build_paged_response(items, total, pagination)


@router.post(
    "",
    response_model=MovieResponse,
    status_code=status.HTTP_200_OK,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": SaveMovieRequest.model_json_schema()}},
        }
    },
)
def save_movie(
    user_id: str,
    country: Optional[str] = Query(None, description="Required. Country the movie must be available in"),
    raw_body: bytes = Depends(get_raw_body),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Save a movie for later

    - **movie_id**: movie UUID (body)
    - **country**: query parameter; the movie must be available there

    The body is validated after the path and country checks.

    Errors: MOVIE_NOT_FOUND (404), UNAVAILABLE_IN_COUNTRY (422), DUPLICATE_SAVE (409)
    """
    owner_id = require_path_user(user_id, current_user)
    country_code = normalize_country_code(country, required=True)
    payload = _parse_save_request(raw_body)
    movie_id = parse_uuid(payload.movie_id, "INVALID_MOVIE_ID", "Invalid movie_id: must be a valid UUID")

    movie = MovieService.get_movie(db, movie_id)

    if not MovieService.is_available_in_country(db, movie_id, country_code):
        raise UnavailableInCountry(country_code)

    SavedMovieService.save_movie(db, owner_id, movie_id)
    return movie


@router.delete("/{movie_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_saved_movie(
    user_id: str,
    movie_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Remove a saved movie

    Not idempotent: removing a movie that is not saved returns 404 NOT_SAVED.
    """
    owner_id = require_path_user(user_id, current_user)
    parsed_movie_id = parse_uuid(movie_id, "INVALID_MOVIE_ID", "Invalid movie ID format")
    SavedMovieService.remove_saved_movie(db, owner_id, parsed_movie_id)
    return None
