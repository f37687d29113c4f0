import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlmodel import Session

from app.database import get_session
from app.dependencies.auth import get_current_user_id
from app.errors import OrderApiError, to_http_exception, unexpected_error
from app.schemas.orders_schemas import (
    DeletedOrderResponse,
    OrderCreate,
    OrderPatch,
    OrderResponse,
    order_response,
)
from app.services.order_service import OrderService

logger = logging.getLogger(__name__)

# Every route here sits behind get_current_user_id (see app.main)
router = APIRouter()


def get_order_service(session: Session = Depends(get_session)) -> OrderService:
    return OrderService(session)


def order_not_found(order_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f'Order: "{order_id}" not found.',
    )


@router.post(
    "",
    response_model=OrderResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
def create_order(
    payload: OrderCreate,
    service: OrderService = Depends(get_order_service),
    user_id: int = Depends(get_current_user_id),
):
    try:
        order = service.create(payload, owner_user_id=user_id)
    except OrderApiError as exc:
        raise to_http_exception(exc)
    except Exception:
        logger.exception(f"Create order request failed: order_id={payload.order_id}")
        raise unexpected_error()

    return order_response(order)


@router.get("/list", response_model=List[OrderResponse], response_model_exclude_none=True)
def list_orders(
    items: bool = Query(default=False, description="Include each order's items"),
    service: OrderService = Depends(get_order_service),
):
    try:
        orders = service.list(include_items=items)
    except Exception:
        logger.exception("List orders request failed")
        raise unexpected_error()

    return [order_response(order, include_items=items) for order in orders]


@router.get("/{order_id}", response_model=OrderResponse, response_model_exclude_none=True)
def get_order(
    order_id: str,
    items: bool = Query(default=True, description="Include the order's items"),
    service: OrderService = Depends(get_order_service),
):
    try:
        order = service.get(order_id, include_items=items)
    except Exception:
        logger.exception(f"Get order request failed: order_id={order_id}")
        raise unexpected_error()

    if order is None:
        raise order_not_found(order_id)

    return order_response(order, include_items=items)


@router.patch("/{order_id}", response_model=OrderResponse, response_model_exclude_none=True)
def patch_order(
    order_id: str,
    delta: OrderPatch,
    service: OrderService = Depends(get_order_service),
):
    try:
        order = service.patch(order_id, delta)
    except OrderApiError as exc:
        raise to_http_exception(exc)
    except Exception:
        logger.exception(f"Patch order request failed: order_id={order_id}")
        raise unexpected_error()

    return order_response(order)


@router.delete("/{order_id}", response_model=DeletedOrderResponse, response_model_exclude_none=True)
def delete_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
):
    try:
        order = service.delete(order_id)
    except Exception:
        logger.exception(f"Delete order request failed: order_id={order_id}")
        raise unexpected_error()

    if order is None:
        raise order_not_found(order_id)

    return DeletedOrderResponse(deleted=order_response(order))
