"""
Storefront Backend: Application Package
=======================================

What: REST backend for products, orders and users.
Who:  Imported by uvicorn (`storefront.main:app`), Alembic and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │     Routes + Auth (HTTP Layer)      │  ← status codes, permissions
    ├─────────────────────────────────────┤
    │   Repositories (Persistence Rules)  │  ← validation, uniqueness, CRUD
    ├─────────────────────────────────────┤
    │  Query Options / Validation Rules   │  ← pure functions
    ├─────────────────────────────────────┤
    │  Models & Schemas & Transformers    │  ← ORM rows, API contracts
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← async SQLAlchemy sessions
    └─────────────────────────────────────┘

    Routes never build queries themselves; repositories never know about HTTP.
"""

__version__ = "1.0.0"
