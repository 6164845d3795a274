"""
Storefront Backend: API Routes Package
======================================

Route Inventory:
    - auth.py:      POST /v1/auth/register, /v1/auth/login
    - products.py:  /v1/products CRUD
    - orders.py:    /v1/orders CRUD
    - users.py:     /v1/users CRUD
    - health.py:    GET /health

Routes stay thin: guard, call a repository, transform, return.
"""
