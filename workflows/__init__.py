"""Service layer for recording applications and notifying staff."""

from .mailer import EmailNotifier
from .messaging import WhatsAppNotifier
from .notifications import NotificationDispatcher, compose_summary
from .submission import ApplicationRecorder, validate_submission

__all__ = [
    "ApplicationRecorder",
    "EmailNotifier",
    "NotificationDispatcher",
    "WhatsAppNotifier",
    "compose_summary",
    "validate_submission",
]
