"""Notification endpoints."""

import logging

from fastapi import APIRouter

from sportsync.api.schemas import NotificationListResponse, NotificationResponse
from sportsync.auth import AUTH_RESPONSES, NOT_FOUND_RESPONSE, CurrentUser
from sportsync.core.context import Context
from sportsync.core.exceptions import NotFoundError
from sportsync.notifications.reminders import check_upcoming_for_user

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=NotificationListResponse, responses=AUTH_RESPONSES)
async def list_notifications(user: CurrentUser, context: Context) -> NotificationListResponse:
    """The caller's notifications, newest first."""
    notifications = await context.storage.get_notifications_by_user_id(user.id)
    return NotificationListResponse(notifications=notifications)


@router.put(
    "/{notification_id}/read",
    response_model=NotificationResponse,
    responses={**AUTH_RESPONSES, **NOT_FOUND_RESPONSE},
)
async def mark_read(
    notification_id: int,
    user: CurrentUser,
    context: Context,
) -> NotificationResponse:
    """Mark one of the caller's notifications as read. Repeating it is harmless."""
    notification = await context.storage.get_notification(notification_id)
    # Other users' notifications are indistinguishable from missing ones
    if notification is None or notification.user_id != user.id:
        raise NotFoundError("Notification not found")

    updated = await context.storage.mark_notification_as_read(notification_id)
    if updated is None:
        raise NotFoundError("Notification not found")
    return NotificationResponse(notification=updated)


@router.post(
    "/check-upcoming",
    response_model=NotificationListResponse,
    responses=AUTH_RESPONSES,
)
async def check_upcoming(user: CurrentUser, context: Context) -> NotificationListResponse:
    """Create reminders for favorited matches starting in 24 hours or 1 hour.

    Returns only the notifications created by this call.
    """
    created = await check_upcoming_for_user(context.storage, user.id)
    return NotificationListResponse(notifications=created)
