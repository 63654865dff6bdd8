from pydantic import Field
from typing import Any, Dict, List, Optional
from datetime import datetime
from decimal import Decimal

from core.schemas import CamelModel
from ..enums.order_enums import OrderStatus


class OrderStep(CamelModel):
    step: str
    timestamp: datetime


class OrderCreate(CamelModel):
    total_amount: Decimal = Field(..., gt=0, decimal_places=2)


class OrderStatusUpdate(CamelModel):
    status: OrderStatus


class DriverInfo(CamelModel):
    id: Optional[int] = None
    name: str
    phone: Optional[str] = None
    vehicle: Optional[str] = None


class DriverLocation(CamelModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    heading: Optional[float] = None


class OrderOut(CamelModel):
    id: int
    user_id: int
    total_amount: Decimal
    paid: bool
    status: OrderStatus
    steps: List[OrderStep] = []
    driver: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime
