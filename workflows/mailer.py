"""Email notification with the résumé attached, sent over SMTP."""
from __future__ import annotations

import mimetypes
from email.message import EmailMessage

import aiosmtplib

from intake.config import Settings
from intake.errors import NotificationError
from intake.schemas import ApplicationForm, ResumeAttachment

from .notifications import compose_summary

SUBJECT = "New Job Application Submitted"
DEFAULT_ATTACHMENT_TYPE = "application/octet-stream"


class EmailNotifier:
    """Send the application summary to the staff mailbox."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def build_message(self, form: ApplicationForm, resume: ResumeAttachment) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = SUBJECT
        message["From"] = self.settings.email_user
        message["To"] = self.settings.email_recipient
        message.set_content(compose_summary(form))

        maintype, subtype = _attachment_type(resume).split("/", 1)
        message.add_attachment(
            resume.content,
            maintype=maintype,
            subtype=subtype,
            filename=resume.filename,
        )
        return message

    async def send(self, form: ApplicationForm, resume: ResumeAttachment) -> str:
        """Deliver the message and return the server's response line."""

        message = self.build_message(form, resume)
        try:
            _, response = await aiosmtplib.send(
                message,
                hostname=self.settings.smtp_host,
                port=self.settings.smtp_port,
                use_tls=self.settings.smtp_use_tls,
                start_tls=not self.settings.smtp_use_tls,
                username=self.settings.email_user,
                password=self.settings.email_pass,
                timeout=self.settings.smtp_timeout_seconds,
            )
        except (aiosmtplib.SMTPException, OSError) as exc:
            raise NotificationError(f"SMTP delivery failed: {exc}") from exc
        return response


def _attachment_type(resume: ResumeAttachment) -> str:
    content_type = resume.content_type
    if not content_type or "/" not in content_type:
        content_type, _ = mimetypes.guess_type(resume.filename)
    return content_type or DEFAULT_ATTACHMENT_TYPE
