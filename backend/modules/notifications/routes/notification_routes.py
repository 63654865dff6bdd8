# backend/modules/notifications/routes/notification_routes.py

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from core.database import get_db
from core.auth import get_current_user, TokenData
from core.error_handling import handle_api_errors
from core.schemas import Pagination

from ..services.notification_service import NotificationService
from ..schemas.notification_schemas import NotificationList, NotificationResponse

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=NotificationList)
@handle_api_errors(default_message="Failed to fetch notifications")
async def list_notifications(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    notifications, total = NotificationService(db).list_notifications(
        current_user.user_id, skip=(page - 1) * limit, limit=limit
    )
    return {
        "notifications": notifications,
        "pagination": Pagination.build(page, limit, total),
    }


@router.put("/{notification_id}/read", response_model=NotificationResponse)
@handle_api_errors(default_message="Failed to update notification")
async def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: TokenData = Depends(get_current_user),
):
    """Mark one of the current user's notifications as read"""
    return NotificationService(db).mark_read(current_user.user_id, notification_id)
