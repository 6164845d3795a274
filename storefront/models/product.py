"""
Storefront Backend: Product SQLAlchemy Model
============================================

What:  ORM model for the `products` table.
Who:   ProductRepository for CRUD; Alembic for schema management.

Field rules (enforced by storefront.validation before every write):
    name        non-empty, ≥ 2 chars, not all-lowercase, unique
    avatar_url  valid URL
    rating      integer 1-5
    quantity    integer 1-1000
    price       0.01-1000.00
"""

from sqlalchemy import Boolean, Integer, Numeric, String, text
from sqlalchemy.orm import Mapped, mapped_column

from storefront.database import Base
from storefront.models.common import EntityMixin


class Product(EntityMixin, Base):
    __tablename__ = "products"

    # Uniqueness is checked by the repository (ConflictError); the index
    # keeps name lookups and filters cheap.
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    avatar_url: Mapped[str] = mapped_column(String(2048), nullable=False)

    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    # asdecimal=False: the API speaks JSON numbers, not Decimal strings
    price: Mapped[float] = mapped_column(Numeric(10, 2, asdecimal=False), nullable=False)

    disabled: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=text("false"),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"
