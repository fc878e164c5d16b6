"""
Domain errors raised by the validator and the book repository.
"""


class BookValidationError(ValueError):
    """A book payload is missing a required field."""

    def __init__(self, message: str = "Title and author are required"):
        super().__init__(message)
        self.message = message


class BookNotFoundError(LookupError):
    """No book exists for the requested id."""

    def __init__(self, book_id=None):
        super().__init__("Book not found")
        self.book_id = book_id
        self.message = "Book not found"
