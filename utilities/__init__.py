"""
Shared utilities for the Books API.
"""
