from enum import Enum


class OrderStatus(str, Enum):
    PLACED = "placed"
    ACCEPTED = "accepted"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class OrderSocketEvent(str, Enum):
    JOIN_ORDER = "join_order"
    LEAVE_ORDER = "leave_order"
    ORDER_UPDATE = "order:update"
    DRIVER_ASSIGNED = "driver:assigned"
    DRIVER_LOCATION = "driver:location"
