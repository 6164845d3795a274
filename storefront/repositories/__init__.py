"""
Resource repositories. Each one is built per request around the request's
AsyncSession; nothing is shared between requests.
"""

from storefront.repositories.base import Repository
from storefront.repositories.order_repository import OrderRepository
from storefront.repositories.product_repository import ProductRepository
from storefront.repositories.user_repository import UserRepository

__all__ = ["OrderRepository", "ProductRepository", "Repository", "UserRepository"]
