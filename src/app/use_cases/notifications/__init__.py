"""
Notification Use Cases

In-app notifications and their email hand-off.
"""

from .create_notification_use_case import CreateNotificationUseCase
from .dismiss_notification_use_case import DismissNotificationUseCase
from .dtos import CreateNotificationCommand
from .list_notifications_use_case import ListNotificationsUseCase
from .mark_notification_read_use_case import MarkNotificationReadUseCase
from .recipients import notify_users, tenant_admin_ids

__all__ = [
    "CreateNotificationUseCase",
    "CreateNotificationCommand",
    "DismissNotificationUseCase",
    "ListNotificationsUseCase",
    "MarkNotificationReadUseCase",
    "notify_users",
    "tenant_admin_ids",
]
