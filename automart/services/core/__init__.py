"""
Core Services Module

Business services for categories, products and authentication.
"""

from .auth_service import AuthService
from .category_service import CategoryService
from .product_service import ProductService

__all__ = [
    "AuthService",
    "CategoryService",
    "ProductService",
]
