from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Optional
from uuid import UUID


class GenreResponse(BaseModel):
    """Response schema for genre list"""
    id: UUID
    name: str

    model_config = ConfigDict(from_attributes=True)


class MovieResponse(BaseModel):
    """Movie as shown in list endpoints"""
    id: UUID
    title: str
    year: int

    model_config = ConfigDict(from_attributes=True)


class MovieDetailResponse(MovieResponse):
    genre_id: Optional[UUID] = None


class SavedMovieResponse(MovieResponse):
    """Saved movie with the time it was bookmarked"""
    date_added: datetime


class SaveMovieRequest(BaseModel):
    """Schema for saving a movie; the id is parsed by the route so a bad value maps to INVALID_MOVIE_ID"""
    movie_id: Optional[str] = Field(None, description="Movie UUID")
