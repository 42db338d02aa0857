"""
Roster notifications module.

Invite email delivery.
"""

from .base import NotificationError, NotificationGateway
from .mailer import InviteEmail, LogNotifier, MailgunNotifier, create_notifier

__all__ = [
    "NotificationGateway",
    "NotificationError",
    "InviteEmail",
    "MailgunNotifier",
    "LogNotifier",
    "create_notifier",
]
