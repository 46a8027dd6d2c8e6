"""
Shared response envelopes
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, Generic, List, TypeVar

T = TypeVar("T")


class PagedResponse(BaseModel, Generic[T]):
    """
    Uniform envelope for list endpoints

    - **data**: the requested page (may be empty past the last page)
    - **total**: rows matching the filter, ignoring the page window
    """
    data: List[T]
    page: int
    page_size: int
    total: int


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Body of every non-2xx response"""
    error: ErrorDetail
