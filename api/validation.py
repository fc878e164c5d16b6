"""
Book payload validation and normalization.
"""

from typing import Any, Callable, Mapping, Optional, Union

from pydantic import BaseModel

from api.exceptions import BookValidationError
from api.models import Book


def _clean_text(value: Any) -> Optional[str]:
    """Return the trimmed string, or None when it is missing or blank."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _clean_year(value: Any) -> Optional[int]:
    """Falsy years (missing, null, 0) are stored as null."""
    if not value:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise BookValidationError("publishedYear must be an integer")
    return value


def validate_book(
    payload: Union[Mapping[str, Any], BaseModel],
    id_factory: Callable[[], int],
    book_id: Optional[int] = None
) -> Book:
    """
    Validate a candidate payload and build a normalized Book.

    Args:
        payload: Request body as a mapping (JSON field names) or a request model
        id_factory: Called for a fresh id when book_id is not given
        book_id: Existing id to keep, used for updates

    Returns:
        The normalized Book

    Raises:
        BookValidationError: If title or author is missing or blank
    """
    if isinstance(payload, BaseModel):
        data = payload.model_dump(by_alias=True)
    else:
        data = dict(payload)

    title = _clean_text(data.get("title"))
    author = _clean_text(data.get("author"))
    if title is None or author is None:
        raise BookValidationError()

    published_year = _clean_year(data.get("publishedYear"))

    # Draw the id last so rejected payloads never consume one
    if book_id is None:
        book_id = id_factory()

    return Book(id=book_id, title=title, author=author, published_year=published_year)
