"""WhatsApp notification through the Twilio REST API."""
from __future__ import annotations

from collections.abc import Callable
from typing import Any

from anyio import to_thread
from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from intake.config import Settings
from intake.errors import NotificationError
from intake.schemas import ApplicationForm

from .notifications import compose_summary


class WhatsAppNotifier:
    """Send the application summary from the configured sender to staff."""

    def __init__(self, settings: Settings, client_factory: Callable[[], Any] | None = None) -> None:
        self.settings = settings
        self._client_factory = client_factory or self._default_client
        self._client: Any = None

    def _default_client(self) -> Client:
        return Client(self.settings.twilio_account_sid, self.settings.twilio_auth_token)

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = self._client_factory()
        return self._client

    async def send(self, form: ApplicationForm) -> str:
        """Create the message and return its SID."""

        body = compose_summary(form)
        try:
            # The Twilio SDK is blocking.
            message = await to_thread.run_sync(self._create, body)
        except (TwilioException, OSError) as exc:
            raise NotificationError(f"Twilio delivery failed: {exc}") from exc
        return message.sid

    def _create(self, body: str) -> Any:
        return self.client.messages.create(
            body=body,
            from_=self.settings.twilio_whatsapp_number,
            to=self.settings.staff_whatsapp_number,
        )
