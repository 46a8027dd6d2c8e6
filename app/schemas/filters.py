"""
Filter and sort descriptors for list endpoints
Built by app.utils.filters and consumed by the query services
"""
from pydantic import BaseModel, ConfigDict
from typing import Optional
from uuid import UUID
from enum import Enum


# ============================================
# Enums for type-safe sort options
# ============================================

class SortMixin:
    """A leading '-' means descending"""

    @property
    def descending(self) -> bool:
        return self.value.startswith("-")


class MovieSort(SortMixin, str, Enum):
    """Sort options for the movie catalog"""
    YEAR_ASC = "year"
    YEAR_DESC = "-year"

    @classmethod
    def default(cls) -> "MovieSort":
        return cls.YEAR_DESC


class SavedMovieSort(SortMixin, str, Enum):
    """Sort options for a user's saved movies"""
    DATE_ADDED_ASC = "date_added"
    DATE_ADDED_DESC = "-date_added"

    @classmethod
    def default(cls) -> "SavedMovieSort":
        return cls.DATE_ADDED_DESC


# ============================================
# Filter descriptors
# ============================================

class MovieFilter(BaseModel):
    """Validated catalog filter: every field already normalised"""
    genre_id: Optional[UUID] = None
    country_code: Optional[str] = None
    sort: MovieSort = MovieSort.YEAR_DESC

    model_config = ConfigDict(frozen=True)


class SavedMovieFilter(BaseModel):
    """Saved-movie listing is always scoped to one country"""
    country_code: str
    sort: SavedMovieSort = SavedMovieSort.DATE_ADDED_DESC

    model_config = ConfigDict(frozen=True)
