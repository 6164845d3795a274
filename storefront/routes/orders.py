"""
Storefront Backend: Order Route Handlers
========================================

Route Inventory:
    POST   /v1/orders            manageOrders   201
    GET    /v1/orders            getOrders      200 (name, disabled, sortBy, limit, page)
    GET    /v1/orders/{id}       getOrders      200
    PATCH  /v1/orders/{id}       manageOrders   200
    DELETE /v1/orders/{id}       manageOrders   204

Responses carry the order's public fields only: id, name, price (cart
total) and disabled.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Response

from storefront.auth import require_permission
from storefront.dependencies import get_order_repository
from storefront.models.user import User
from storefront.query_options import LIMIT_PARAM, PAGE_PARAM, SORT_PARAM, build_query_options
from storefront.repositories import OrderRepository
from storefront.schemas.common import ErrorResponse
from storefront.schemas.order import OrderCreate, OrderResponse, OrderUpdate
from storefront.transformers import transform_order

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/orders", tags=["Orders"])

_ERRORS = {
    400: {"description": "Invalid input or malformed id", "model": ErrorResponse},
    401: {"description": "Missing or invalid access token", "model": ErrorResponse},
    403: {"description": "Insufficient rights", "model": ErrorResponse},
}
_NOT_FOUND = {404: {"description": "Order not found", "model": ErrorResponse}}


@router.post("", status_code=201, response_model=OrderResponse, responses=_ERRORS, summary="Create an order")
async def create_order(
    body: OrderCreate,
    orders: OrderRepository = Depends(get_order_repository),
    _: User = Depends(require_permission("manageOrders")),
) -> Dict[str, Any]:
    order = await orders.create(body.model_dump(exclude_unset=True))
    return transform_order(order)


@router.get("", response_model=List[OrderResponse], responses=_ERRORS, summary="List orders")
async def list_orders(
    name: Optional[str] = Query(default=None),
    disabled: Optional[bool] = Query(default=None),
    sort_by: Optional[str] = Query(default=None, alias=SORT_PARAM, description="field:asc or field:desc"),
    limit: Optional[str] = Query(default=None, description="Page size"),
    page: Optional[str] = Query(default=None, description="Page number, starting at 1"),
    orders: OrderRepository = Depends(get_order_repository),
    _: User = Depends(require_permission("getOrders")),
) -> List[Dict[str, Any]]:
    options = build_query_options(
        {"name": name, "disabled": disabled, SORT_PARAM: sort_by, LIMIT_PARAM: limit, PAGE_PARAM: page},
        allowed_filters=orders.filter_fields,
    )
    return [transform_order(order) for order in await orders.list(options)]


@router.get(
    "/{order_id}",
    response_model=OrderResponse,
    responses={**_ERRORS, **_NOT_FOUND},
    summary="Get an order",
)
async def get_order(
    order_id: str,
    orders: OrderRepository = Depends(get_order_repository),
    _: User = Depends(require_permission("getOrders")),
) -> Dict[str, Any]:
    return transform_order(await orders.get(order_id))


@router.patch(
    "/{order_id}",
    response_model=OrderResponse,
    responses={**_ERRORS, **_NOT_FOUND},
    summary="Update an order",
)
async def update_order(
    order_id: str,
    body: OrderUpdate,
    orders: OrderRepository = Depends(get_order_repository),
    _: User = Depends(require_permission("manageOrders")),
) -> Dict[str, Any]:
    order = await orders.update(order_id, body.changes())
    return transform_order(order)


@router.delete(
    "/{order_id}",
    status_code=204,
    responses={**_ERRORS, **_NOT_FOUND},
    summary="Delete an order",
)
async def delete_order(
    order_id: str,
    orders: OrderRepository = Depends(get_order_repository),
    _: User = Depends(require_permission("manageOrders")),
) -> Response:
    await orders.remove(order_id)
    return Response(status_code=204)
