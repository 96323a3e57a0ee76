"""
ORM models

Imported together so that relationship targets resolve regardless of
which model module is loaded first.
"""

from .category import Category
from .product import Product
from .user import User, ROLE_USER, ROLE_ADMIN

__all__ = [
    "Category",
    "Product",
    "User",
    "ROLE_USER",
    "ROLE_ADMIN",
]
