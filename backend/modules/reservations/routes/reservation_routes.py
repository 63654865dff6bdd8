# backend/modules/reservations/routes/reservation_routes.py

"""
Reservation API routes.

Booking is public; listing and managing reservations is admin only.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from core.database import get_db
from core.auth import require_role, TokenData
from core.error_handling import handle_api_errors
from ..services import ReservationService
from ..schemas import (
    ReservationCreate,
    ReservationStatusUpdate,
    ReservationResponse,
    ReservationMessageResponse,
    MessageResponse,
)

router = APIRouter(prefix="/reservations", tags=["Reservations"])

require_admin = require_role("admin")


@router.post(
    "",
    response_model=ReservationMessageResponse,
    status_code=status.HTTP_201_CREATED,
)
@handle_api_errors
async def create_reservation(
    reservation_data: ReservationCreate,
    db: Session = Depends(get_db),
):
    """
    Submit a reservation request.

    - Requires name, email, reservationDate and totalPeople
    - The date must be in the future
    - New reservations start as pending
    """
    service = ReservationService(db)

    try:
        reservation = service.create_reservation(reservation_data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return {"message": "Reservation created successfully", "reservation": reservation}


@router.get("", response_model=List[ReservationResponse])
@handle_api_errors
async def list_reservations(
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_admin),
):
    """All reservations, newest first"""
    return ReservationService(db).list_reservations()


@router.get("/{reservation_id}", response_model=ReservationResponse)
@handle_api_errors
async def get_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_admin),
):
    return ReservationService(db).get_reservation(reservation_id)


@router.put("/{reservation_id}/status", response_model=ReservationMessageResponse)
@handle_api_errors
async def update_reservation_status(
    reservation_id: int,
    update: ReservationStatusUpdate,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_admin),
):
    service = ReservationService(db)

    try:
        reservation = service.update_status(reservation_id, update.status)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return {
        "message": "Reservation status updated successfully",
        "reservation": reservation,
    }


@router.delete("/{reservation_id}", response_model=MessageResponse)
@handle_api_errors
async def delete_reservation(
    reservation_id: int,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(require_admin),
):
    ReservationService(db).delete_reservation(reservation_id)
    return {"message": "Reservation deleted successfully"}
