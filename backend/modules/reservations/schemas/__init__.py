from .reservation_schemas import (
    ReservationCreate,
    ReservationStatusUpdate,
    ReservationResponse,
    ReservationMessageResponse,
    MessageResponse,
)

__all__ = [
    "ReservationCreate",
    "ReservationStatusUpdate",
    "ReservationResponse",
    "ReservationMessageResponse",
    "MessageResponse",
]
