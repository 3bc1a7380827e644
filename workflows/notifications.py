"""Detached delivery of staff notifications."""
from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from fastapi import BackgroundTasks

from intake.errors import NotificationError
from intake.schemas import ApplicationForm, ResumeAttachment

logger = logging.getLogger(__name__)


def compose_summary(form: ApplicationForm) -> str:
    """Plain-text summary shared by the email body and the WhatsApp message."""

    return (
        "A new job application has been submitted:\n\n"
        f"Name: {form.name}\n"
        f"Email: {form.email}\n"
        f"Phone: {form.phone}\n"
        f"Position: {form.position}"
    )


class EmailTransport(Protocol):
    async def send(self, form: ApplicationForm, resume: ResumeAttachment) -> str: ...


class MessageTransport(Protocol):
    async def send(self, form: ApplicationForm) -> str: ...


class NotificationDispatcher:
    """Fire-and-forget email and WhatsApp notifications for a saved application.

    Both deliveries run in one background task scheduled after the response,
    concurrently with each other. Failures are logged and never re-raised.
    """

    def __init__(self, email_notifier: EmailTransport, message_notifier: MessageTransport) -> None:
        self.email_notifier = email_notifier
        self.message_notifier = message_notifier

    def schedule(
        self,
        background_tasks: BackgroundTasks,
        form: ApplicationForm,
        resume: ResumeAttachment,
    ) -> None:
        background_tasks.add_task(self.deliver, form, resume)

    async def deliver(self, form: ApplicationForm, resume: ResumeAttachment) -> None:
        await asyncio.gather(self._deliver_email(form, resume), self._deliver_message(form))

    async def _deliver_email(self, form: ApplicationForm, resume: ResumeAttachment) -> None:
        try:
            response = await self.email_notifier.send(form, resume)
        except NotificationError as exc:
            logger.error("Error sending email: %s", exc)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Unexpected error sending email")
        else:
            logger.info("Email sent: %s", response)

    async def _deliver_message(self, form: ApplicationForm) -> None:
        try:
            sid = await self.message_notifier.send(form)
        except NotificationError as exc:
            logger.error("Error sending WhatsApp message: %s", exc)
        except Exception:  # pylint: disable=broad-except
            logger.exception("Unexpected error sending WhatsApp message")
        else:
            logger.info("WhatsApp message sent: %s", sid)
