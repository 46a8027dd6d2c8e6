"""
Pagination helpers

Query parameters arrive as raw strings so that each bad value can be
reported with its own error code instead of FastAPI's generic 422.
"""
import re
from typing import List, NamedTuple, Optional, Sequence, TypeVar

from app.schemas.common import PagedResponse
from app.utils.errors import ValidationFailed

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100

# Largest value a signed 64-bit SQL integer (OFFSET, LIMIT) can hold
MAX_INT64 = 2 ** 63 - 1

INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

T = TypeVar("T")


class Pagination(NamedTuple):
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        """SQL OFFSET for this page"""
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


def _parse_positive_int(raw: Optional[str], default: int, code: str, message: str) -> int:
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip()
    # ASCII digits only; int() alone would also take "1_0" or non-Latin digits
    if not INTEGER_PATTERN.fullmatch(value):
        raise ValidationFailed(code, message)
    try:
        value = int(value)
    except ValueError:
        raise ValidationFailed(code, message)
    if value < 1 or value > MAX_INT64:
        raise ValidationFailed(code, message)
    return value


def resolve_pagination(page: Optional[str] = None, page_size: Optional[str] = None) -> Pagination:
    """
    Validate page/page_size query values

    - missing page -> 1, missing page_size -> 20
    - non-numeric or < 1 -> INVALID_PAGE / INVALID_PAGE_SIZE
    - page_size > 100 -> PAGE_SIZE_TOO_LARGE (only once the format is valid)
    - an offset beyond a 64-bit integer -> INVALID_PAGE
    """
    page_value = _parse_positive_int(
        page, DEFAULT_PAGE, "INVALID_PAGE", "page must be a positive integer"
    )
    page_size_value = _parse_positive_int(
        page_size, DEFAULT_PAGE_SIZE, "INVALID_PAGE_SIZE", "page_size must be a positive integer"
    )

    if page_size_value > MAX_PAGE_SIZE:
        raise ValidationFailed(
            "PAGE_SIZE_TOO_LARGE",
            f"page_size exceeds maximum allowed value of {MAX_PAGE_SIZE}",
            {"max_page_size": MAX_PAGE_SIZE},
        )

    if (page_value - 1) * page_size_value > MAX_INT64:
        raise ValidationFailed("INVALID_PAGE", "page is out of range")

    return Pagination(page=page_value, page_size=page_size_value)


def build_paged_response(items: Sequence[T], total: int, pagination: Pagination) -> PagedResponse:
    """Wrap one page of results with the pagination echo and the filtered total"""
    data: List[T] = list(items)
    return PagedResponse(
        data=data,
        page=pagination.page,
        page_size=pagination.page_size,
        total=total,
    )
