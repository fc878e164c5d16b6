"""
Books API routes.
"""

from datetime import datetime, timezone
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status

from api.config import APIConfig
from api.models import Book, BookCreate, BookUpdate, ErrorResponse, HealthResponse
from api.store import BookRepository
from utilities.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/books", tags=["Books"])
health_router = APIRouter(tags=["Health"])

_NOT_FOUND = {"model": ErrorResponse, "description": "Book not found"}
_INVALID = {"model": ErrorResponse, "description": "Invalid input"}


def get_book_repository(request: Request) -> BookRepository:
    """Repository owned by the running application."""
    return request.app.state.book_repository


def get_settings(request: Request) -> APIConfig:
    """Settings the running application was built with."""
    return request.app.state.config


@router.post(
    "",
    response_model=Book,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new book",
    responses={
        status.HTTP_201_CREATED: {"description": "Book created"},
        status.HTTP_400_BAD_REQUEST: _INVALID,
    },
)
async def create_book(
    payload: BookCreate,
    repository: BookRepository = Depends(get_book_repository)
):
    """
    Create a book.

    - **title**: required, must not be blank
    - **author**: required, must not be blank
    - **publishedYear**: optional integer
    """
    book = repository.create_book(payload)
    logger.info("Book created", book_id=book.id)
    return book


@router.get(
    "",
    response_model=List[Book],
    summary="Get all books",
    responses={status.HTTP_200_OK: {"description": "List of books"}},
)
async def list_books(repository: BookRepository = Depends(get_book_repository)):
    """Get every book in the order it was created."""
    return repository.list_books()


@router.get(
    "/{book_id}",
    response_model=Book,
    summary="Get a book by ID",
    responses={
        status.HTTP_200_OK: {"description": "Book found"},
        status.HTTP_404_NOT_FOUND: _NOT_FOUND,
    },
)
async def get_book(
    book_id: int,
    repository: BookRepository = Depends(get_book_repository)
):
    """Get a single book by ID."""
    return repository.get_book(book_id)


@router.put(
    "/{book_id}",
    response_model=Book,
    summary="Update a book",
    responses={
        status.HTTP_200_OK: {"description": "Book updated"},
        status.HTTP_400_BAD_REQUEST: _INVALID,
        status.HTTP_404_NOT_FOUND: _NOT_FOUND,
    },
)
async def update_book(
    book_id: int,
    payload: BookUpdate,
    repository: BookRepository = Depends(get_book_repository)
):
    """
    Update a book.

    Fields left out of the body keep their current value. The id never changes.
    """
    book = repository.update_book(book_id, payload.changes())
    logger.info("Book updated", book_id=book.id)
    return book


@router.delete(
    "/{book_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a book",
    responses={
        status.HTTP_204_NO_CONTENT: {"description": "Book deleted"},
        status.HTTP_404_NOT_FOUND: _NOT_FOUND,
    },
)
async def delete_book(
    book_id: int,
    repository: BookRepository = Depends(get_book_repository)
):
    """Delete a book."""
    repository.delete_book(book_id)
    logger.info("Book deleted", book_id=book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@health_router.get("/health", response_model=HealthResponse)
async def health_check(
    repository: BookRepository = Depends(get_book_repository),
    settings: APIConfig = Depends(get_settings)
):
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=settings.api_version,
        books_count=repository.count()
    )
