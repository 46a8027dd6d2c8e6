import uuid

import pytest

from app.schemas.filters import MovieSort, SavedMovieSort
from app.utils.errors import ValidationFailed
from app.utils.filters import (
    build_movie_filter,
    normalize_country_code,
    parse_genre_id,
    parse_sort,
    parse_uuid,
)


# ============================================
# Country codes
# ============================================

@pytest.mark.parametrize("raw", ["us", "US", " uS "])
def test_country_code_is_upper_cased(raw):
    assert normalize_country_code(raw) == "US"


@pytest.mark.parametrize("raw", ["USA", "U", "1A", "u$", "ß", "ÉS"])
def test_invalid_country_code(raw):
    with pytest.raises(ValidationFailed) as exc_info:
        normalize_country_code(raw)
    assert exc_info.value.code == "INVALID_COUNTRY_CODE"


def test_optional_country_may_be_absent():
    assert normalize_country_code(None) is None
    assert normalize_country_code("") is None


def test_required_country_missing():
    with pytest.raises(ValidationFailed) as exc_info:
        normalize_country_code("  ", required=True)
    assert exc_info.value.code == "MISSING_COUNTRY"


# ============================================
# Identifiers
# ============================================

def test_genre_id_parsed():
    genre_id = uuid.uuid4()
    assert parse_genre_id(str(genre_id)) == genre_id
    assert parse_genre_id(None) is None


def test_invalid_genre_id():
    with pytest.raises(ValidationFailed) as exc_info:
        parse_genre_id("not-a-uuid")
    assert exc_info.value.code == "INVALID_GENRE_ID"


def test_parse_uuid_uses_given_code():
    with pytest.raises(ValidationFailed) as exc_info:
        parse_uuid("123", "INVALID_USER_ID", "Invalid user ID format")
    assert exc_info.value.code == "INVALID_USER_ID"

    with pytest.raises(ValidationFailed):
        parse_uuid(None, "INVALID_MOVIE_ID", "Invalid movie_id")


# ============================================
# Sorting
# ============================================

def test_sort_defaults():
    assert parse_sort(None, MovieSort) is MovieSort.YEAR_DESC
    assert parse_sort("", SavedMovieSort) is SavedMovieSort.DATE_ADDED_DESC


def test_sort_direction():
    assert parse_sort("-year", MovieSort).descending
    assert not parse_sort("year", MovieSort).descending
    assert not parse_sort("date_added", SavedMovieSort).descending


@pytest.mark.parametrize("raw,options", [
    ("title", MovieSort),
    ("date_added", MovieSort),
    ("-year", SavedMovieSort),
    ("YEAR", MovieSort),
])
def test_sort_outside_allowed_set(raw, options):
    with pytest.raises(ValidationFailed) as exc_info:
        parse_sort(raw, options)
    assert exc_info.value.code == "INVALID_SORT_PARAMETER"


# ============================================
# Descriptors
# ============================================

def test_build_movie_filter():
    genre_id = uuid.uuid4()
    movie_filter = build_movie_filter(genre=str(genre_id), country="gb", sort="year")
    assert movie_filter.genre_id == genre_id
    assert movie_filter.country_code == "GB"
    assert movie_filter.sort is MovieSort.YEAR_ASC


def test_build_movie_filter_without_inputs():
    movie_filter = build_movie_filter()
    assert movie_filter.genre_id is None
    assert movie_filter.country_code is None
    assert movie_filter.sort is MovieSort.YEAR_DESC

