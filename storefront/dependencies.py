"""
FastAPI dependency providers: one repository per request, built around the
request's database session.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_db_session
from storefront.repositories import OrderRepository, ProductRepository, UserRepository


def get_product_repository(db: AsyncSession = Depends(get_db_session)) -> ProductRepository:
    return ProductRepository(db)


def get_order_repository(db: AsyncSession = Depends(get_db_session)) -> OrderRepository:
    return OrderRepository(db)


def get_user_repository(db: AsyncSession = Depends(get_db_session)) -> UserRepository:
    return UserRepository(db)
