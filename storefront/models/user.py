"""
Storefront Backend: User SQLAlchemy Model
=========================================

What:  ORM model for the `users` table; the identities behind bearer tokens.

``password`` always holds a bcrypt hash, never the plain text. It is an
internal field: transformers never emit it.
"""

from sqlalchemy import String, text
from sqlalchemy.orm import Mapped, mapped_column

from storefront.database import Base
from storefront.models.common import EntityMixin
from storefront.roles import USER


class User(EntityMixin, Base):
    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    # Stored lowercased; uniqueness checked by UserRepository
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True)

    password: Mapped[str] = mapped_column(String(255), nullable=False)

    role: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=USER,
        server_default=text("'user'"),
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
