"""
Turn raw query/path values into validated filter descriptors.
Nothing here touches the database.
"""
import re
from typing import Optional, Type, TypeVar
from uuid import UUID

from app.schemas.filters import MovieFilter, MovieSort, SavedMovieSort
from app.utils.errors import ValidationFailed

COUNTRY_CODE_PATTERN = re.compile(r"[A-Za-z]{2}")

SortT = TypeVar("SortT", MovieSort, SavedMovieSort)


def _clean(raw: Optional[str]) -> Optional[str]:
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


def parse_uuid(raw: Optional[str], code: str, message: str) -> UUID:
    """Parse a required UUID, raising the given error code when it is malformed"""
    value = _clean(raw)
    if value is None:
        raise ValidationFailed(code, message)
    try:
        return UUID(value)
    except ValueError:
        raise ValidationFailed(code, message)


def parse_genre_id(raw: Optional[str]) -> Optional[UUID]:
    if _clean(raw) is None:
        return None
    return parse_uuid(raw, "INVALID_GENRE_ID", "Invalid genre ID: must be a valid UUID")


def normalize_country_code(raw: Optional[str], required: bool = False) -> Optional[str]:
    """
    Upper-case and validate an ISO-3166-1 alpha-2 code.
    Returns None for an absent optional value.
    """
    value = _clean(raw)
    if value is None:
        if required:
            raise ValidationFailed("MISSING_COUNTRY", "Country parameter is required")
        return None

    # Match before upper-casing; "ß".upper() is "SS"
    if not COUNTRY_CODE_PATTERN.fullmatch(value):
        raise ValidationFailed(
            "INVALID_COUNTRY_CODE",
            "Invalid country code: must be ISO-3166-1 alpha-2 format (2 letters)",
            {"country": raw},
        )
    return value.upper()


def parse_sort(raw: Optional[str], options: Type[SortT]) -> SortT:
    """Match the sort parameter against the allowed values of one listing"""
    value = _clean(raw)
    if value is None:
        return options.default()
    try:
        return options(value)
    except ValueError:
        allowed = [option.value for option in options]
        raise ValidationFailed(
            "INVALID_SORT_PARAMETER",
            "Invalid sort parameter: must be one of " + ", ".join(f"'{a}'" for a in allowed),
            {"allowed": allowed},
        )


def build_movie_filter(
    genre: Optional[str] = None,
    country: Optional[str] = None,
    sort: Optional[str] = None,
) -> MovieFilter:
    """Catalog filter: country and genre are both optional"""
    country_code = normalize_country_code(country)
    genre_id = parse_genre_id(genre)
    return MovieFilter(
        genre_id=genre_id,
        country_code=country_code,
        sort=parse_sort(sort, MovieSort),
    )

