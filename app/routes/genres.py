from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.database import get_db
from app.schemas.common import PagedResponse
from app.schemas.movie import GenreResponse
from app.services.genre_service import GenreService
from app.utils.pagination import resolve_pagination, build_paged_response

router = APIRouter(prefix="/genres", tags=["Genres"])


@router.get("", response_model=PagedResponse[GenreResponse])
def list_genres(
    page: Optional[str] = Query(None, description="Page number (default 1)"),
    page_size: Optional[str] = Query(None, description="Items per page (default 20, max 100)"),
    db: Session = Depends(get_db)
):
    """List all genres, ordered by name"""
    pagination = resolve_pagination(page, page_size)
    genres, total = GenreService.list_genres(db, pagination)
    return build_paged_response(
        [GenreResponse.model_validate(genre) for genre in genres], total, pagination
    )
