"""
Book repository: the collection of books and the id counter behind the API.
"""

import threading
from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Union

from pydantic import BaseModel

from api.exceptions import BookNotFoundError
from api.models import Book
from api.validation import validate_book
from utilities.logger import get_logger

logger = get_logger(__name__)


class BookRepository(ABC):
    """CRUD operations for books."""

    @abstractmethod
    def list_books(self) -> List[Book]:
        """Return every book in insertion order."""

    @abstractmethod
    def get_book(self, book_id: int) -> Book:
        """Return the book with the given id or raise BookNotFoundError."""

    @abstractmethod
    def create_book(self, payload: Union[Mapping[str, Any], BaseModel]) -> Book:
        """Validate a payload, store it under a fresh id and return it."""

    @abstractmethod
    def update_book(self, book_id: int, changes: Mapping[str, Any]) -> Book:
        """Merge changes over an existing book, validate and replace it in place."""

    @abstractmethod
    def delete_book(self, book_id: int) -> None:
        """Remove the book with the given id or raise BookNotFoundError."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored books."""


class InMemoryBookRepository(BookRepository):
    """
    Process-local repository backed by a list.

    Ids start at 1 and are never reused, even after deletes. All operations
    hold a lock so concurrent handlers never interleave a read-modify-write.
    """

    def __init__(self):
        self._books: List[Book] = []
        self._next_id = 1
        self._lock = threading.Lock()

    def _allocate_id(self) -> int:
        # Only called with the lock held
        book_id = self._next_id
        self._next_id += 1
        return book_id

    def _index_of(self, book_id: int) -> int:
        for index, book in enumerate(self._books):
            if book.id == book_id:
                return index
        raise BookNotFoundError(book_id)

    def list_books(self) -> List[Book]:
        with self._lock:
            return [book.model_copy() for book in self._books]

    def get_book(self, book_id: int) -> Book:
        with self._lock:
            return self._books[self._index_of(book_id)].model_copy()

    def create_book(self, payload: Union[Mapping[str, Any], BaseModel]) -> Book:
        with self._lock:
            book = validate_book(payload, self._allocate_id)
            self._books.append(book)
        logger.debug("Book created", book_id=book.id, title=book.title)
        return book.model_copy()

    def update_book(self, book_id: int, changes: Mapping[str, Any]) -> Book:
        with self._lock:
            index = self._index_of(book_id)
            current = self._books[index]
            merged = current.model_dump(by_alias=True)
            merged.update(changes)
            book = validate_book(merged, self._allocate_id, book_id=current.id)
            self._books[index] = book
        logger.debug("Book updated", book_id=book.id, fields=sorted(changes))
        return book.model_copy()

    def delete_book(self, book_id: int) -> None:
        with self._lock:
            del self._books[self._index_of(book_id)]
        logger.debug("Book deleted", book_id=book_id)

    def count(self) -> int:
        with self._lock:
            return len(self._books)
