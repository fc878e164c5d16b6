"""
FastAPI RESTful API for managing books.

This module provides:
- CRUD endpoints for the books collection
- An in-memory book repository
- Generated OpenAPI 3.0 documentation with Swagger UI
"""
