"""
API models and schemas for the Books API.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class Book(BaseModel):
    """A stored book record."""
    id: int = Field(..., ge=1, description="Server-assigned book identifier")
    title: str = Field(..., min_length=1, description="Book title")
    author: str = Field(..., min_length=1, description="Book author")
    published_year: Optional[int] = Field(
        None, alias="publishedYear", description="Year the book was published"
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "id": 1,
                "title": "Dune",
                "author": "Frank Herbert",
                "publishedYear": 1965
            }
        }
    }


class BookCreate(BaseModel):
    """
    Request body for creating a book.

    Title and author are typed as optional so that a missing field reaches the
    book validator and produces the same error as an empty one. The generated
    schema still lists them as required.
    """
    title: Optional[str] = Field(None, description="Book title")
    author: Optional[str] = Field(None, description="Book author")
    published_year: Optional[int] = Field(
        None, alias="publishedYear", description="Year the book was published"
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "required": ["title", "author"],
            "example": {
                "title": "Dune",
                "author": "Frank Herbert",
                "publishedYear": 1965
            }
        }
    }


class BookUpdate(BaseModel):
    """Request body for updating a book. Omitted fields keep their current value."""
    title: Optional[str] = Field(None, description="Book title")
    author: Optional[str] = Field(None, description="Book author")
    published_year: Optional[int] = Field(
        None, alias="publishedYear", description="Year the book was published"
    )

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "title": "Dune Messiah",
                "publishedYear": 1969
            }
        }
    }

    def changes(self) -> dict:
        """Fields explicitly present in the request, keyed by their JSON names."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class ErrorResponse(BaseModel):
    """Error response model."""
    error: str = Field(..., description="Error message")
    detail: Optional[str] = Field(None, description="Additional error details")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Service status")
    timestamp: datetime = Field(..., description="Current timestamp")
    version: str = Field(..., description="API version")
    books_count: int = Field(..., ge=0, description="Number of books currently stored")
