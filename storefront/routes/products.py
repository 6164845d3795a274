"""
Storefront Backend: Product Route Handlers
==========================================

What:  CRUD endpoints for /v1/products.
How:   Each handler guards the route, hands the request to
       ProductRepository and returns the transformed entity.

Route Inventory:
    POST   /v1/products          manageProducts   201
    GET    /v1/products          getProducts      200 (name, disabled, sortBy, limit, page)
    GET    /v1/products/{id}     getProducts      200
    PATCH  /v1/products/{id}     manageProducts   200
    DELETE /v1/products/{id}     manageProducts   204
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Response

from storefront.auth import require_permission
from storefront.dependencies import get_product_repository
from storefront.models.user import User
from storefront.query_options import LIMIT_PARAM, PAGE_PARAM, SORT_PARAM, build_query_options
from storefront.repositories import ProductRepository
from storefront.schemas.common import ErrorResponse
from storefront.schemas.product import ProductCreate, ProductResponse, ProductUpdate
from storefront.transformers import transform_product

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/products", tags=["Products"])

_ERRORS = {
    400: {"description": "Invalid input or malformed id", "model": ErrorResponse},
    401: {"description": "Missing or invalid access token", "model": ErrorResponse},
    403: {"description": "Insufficient rights", "model": ErrorResponse},
}
_NOT_FOUND = {404: {"description": "Product not found", "model": ErrorResponse}}


@router.post(
    "",
    status_code=201,
    response_model=ProductResponse,
    responses=_ERRORS,
    summary="Create a product",
)
async def create_product(
    body: ProductCreate,
    products: ProductRepository = Depends(get_product_repository),
    _: User = Depends(require_permission("manageProducts")),
) -> Dict[str, Any]:
    product = await products.create(body.model_dump(exclude_unset=True))
    return transform_product(product)


@router.get(
    "",
    response_model=List[ProductResponse],
    responses=_ERRORS,
    summary="List products",
    description=(
        "Equality filters on name and disabled; sortBy=field:asc|desc; "
        "limit (page size) and page (1-indexed)."
    ),
)
async def list_products(
    name: Optional[str] = Query(default=None),
    disabled: Optional[bool] = Query(default=None),
    sort_by: Optional[str] = Query(default=None, alias=SORT_PARAM, description="field:asc or field:desc"),
    limit: Optional[str] = Query(default=None, description="Page size"),
    page: Optional[str] = Query(default=None, description="Page number, starting at 1"),
    products: ProductRepository = Depends(get_product_repository),
    _: User = Depends(require_permission("getProducts")),
) -> List[Dict[str, Any]]:
    options = build_query_options(
        {"name": name, "disabled": disabled, SORT_PARAM: sort_by, LIMIT_PARAM: limit, PAGE_PARAM: page},
        allowed_filters=products.filter_fields,
    )
    return [transform_product(product) for product in await products.list(options)]


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={**_ERRORS, **_NOT_FOUND},
    summary="Get a product",
)
async def get_product(
    product_id: str,
    products: ProductRepository = Depends(get_product_repository),
    _: User = Depends(require_permission("getProducts")),
) -> Dict[str, Any]:
    return transform_product(await products.get(product_id))


@router.patch(
    "/{product_id}",
    response_model=ProductResponse,
    responses={**_ERRORS, **_NOT_FOUND},
    summary="Update a product",
)
async def update_product(
    product_id: str,
    body: ProductUpdate,
    products: ProductRepository = Depends(get_product_repository),
    _: User = Depends(require_permission("manageProducts")),
) -> Dict[str, Any]:
    product = await products.update(product_id, body.model_dump(exclude_unset=True, exclude_none=True))
    return transform_product(product)


@router.delete(
    "/{product_id}",
    status_code=204,
    responses={**_ERRORS, **_NOT_FOUND},
    summary="Delete a product",
)
async def delete_product(
    product_id: str,
    products: ProductRepository = Depends(get_product_repository),
    _: User = Depends(require_permission("manageProducts")),
) -> Response:
    await products.remove(product_id)
    return Response(status_code=204)
