from __future__ import annotations

import sqlite3
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from intake.config import Settings
from intake.errors import NotificationError
from intake.main import create_app
from intake.schemas import ApplicationForm, ResumeAttachment

VALID_FIELDS = {
    "name": "Ada Lovelace",
    "email": "ada@example.com",
    "phone": "555-0100",
    "position": "Engineer",
}


class RecordingEmailNotifier:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[tuple[ApplicationForm, ResumeAttachment]] = []

    async def send(self, form: ApplicationForm, resume: ResumeAttachment) -> str:
        self.calls.append((form, resume))
        if self.fail:
            raise NotificationError("smtp down")
        return "250 OK"


class RecordingMessageNotifier:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[ApplicationForm] = []

    async def send(self, form: ApplicationForm) -> str:
        self.calls.append(form)
        if self.fail:
            raise NotificationError("twilio down")
        return "SM0001"


def make_settings(database_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{database_path}",
        email_user="jobs@example.com",
        email_pass="app-password",
        twilio_account_sid="AC0000",
        twilio_auth_token="token",
        twilio_whatsapp_number="whatsapp:+14155238886",
        staff_whatsapp_number="whatsapp:+15550000000",
    )


@pytest.fixture
def database_path(tmp_path: Path) -> Path:
    return tmp_path / "intake.db"


@pytest.fixture
def settings(database_path: Path) -> Settings:
    return make_settings(database_path)


@pytest.fixture
def email_notifier() -> RecordingEmailNotifier:
    return RecordingEmailNotifier()


@pytest.fixture
def message_notifier() -> RecordingMessageNotifier:
    return RecordingMessageNotifier()


@pytest.fixture
def client(settings, email_notifier, message_notifier):
    app = create_app(settings, email_notifier=email_notifier, message_notifier=message_notifier)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def fetch_applications(database_path: Path):
    def _fetch() -> list[tuple[str, str, str, str]]:
        with sqlite3.connect(database_path) as conn:
            return conn.execute("SELECT name, email, phone, position FROM applications").fetchall()

    return _fetch
