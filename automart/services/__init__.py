"""
Services Layer

Business logic services. Each service receives its repositories and
storage collaborators through its constructor.
"""

from .core import AuthService, CategoryService, ProductService

__all__ = [
    "AuthService",
    "CategoryService",
    "ProductService",
]
