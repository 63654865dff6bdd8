from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List

from core.database import get_db
from core.auth import get_current_user, require_role, TokenData
from core.error_handling import handle_api_errors
from ..services.order_service import OrderService
from ..schemas.order_schemas import (
    OrderCreate,
    OrderOut,
    OrderStatusUpdate,
    DriverInfo,
    DriverLocation,
)

router = APIRouter(prefix="/orders", tags=["Orders"])

require_admin = require_role("admin")


@router.post("", response_model=OrderOut, status_code=status.HTTP_201_CREATED)
@handle_api_errors(default_message="Failed to place order")
async def create_order(
    order_data: OrderCreate,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    return OrderService(db).create_order(current_user.user_id, order_data.total_amount)


@router.get("", response_model=List[OrderOut])
@handle_api_errors(default_message="Failed to fetch orders")
async def list_my_orders(
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    return OrderService(db).list_orders_for_user(current_user.user_id)


@router.get("/{order_id}", response_model=OrderOut)
@handle_api_errors(default_message="Failed to fetch order")
async def get_order(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    return OrderService(db).get_order_for(order_id, current_user)


@router.put("/{order_id}/status", response_model=OrderOut)
@handle_api_errors(default_message="Failed to update order status")
async def update_order_status(
    order_id: int,
    update: OrderStatusUpdate,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_admin),
):
    """
    Move an order to a new status.

    - Appends the status to the order's step history
    - Pushes ``order:update`` to everyone tracking the order
    """
    return await OrderService(db).update_status(order_id, update.status)


@router.post("/{order_id}/driver", response_model=OrderOut)
@handle_api_errors(default_message="Failed to assign driver")
async def assign_driver(
    order_id: int,
    driver: DriverInfo,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_admin),
):
    return await OrderService(db).assign_driver(
        order_id, driver.model_dump(by_alias=True, exclude_none=True)
    )


@router.post("/{order_id}/driver/location")
@handle_api_errors(default_message="Failed to publish driver location")
async def publish_driver_location(
    order_id: int,
    location: DriverLocation,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_admin),
):
    """Relay a driver position to the order room as ``driver:location``"""
    return await OrderService(db).update_driver_location(
        order_id, location.model_dump(by_alias=True, exclude_none=True)
    )
