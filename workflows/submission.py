"""Validation and persistence of incoming applications."""
from __future__ import annotations

import logging

from fastapi import UploadFile
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from intake.errors import PersistenceError, ValidationError
from intake.models import Application
from intake.schemas import ApplicationForm, ResumeAttachment

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "All fields are required, including the CV."


async def validate_submission(
    *,
    name: str | None,
    email: str | None,
    phone: str | None,
    position: str | None,
    cv: UploadFile | None,
) -> tuple[ApplicationForm, ResumeAttachment]:
    """Check that every field and the CV are present and read the CV into memory.

    Only presence is checked; values are kept exactly as submitted.
    """

    if not name or not email or not phone or not position or cv is None or not cv.filename:
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    form = ApplicationForm(name=name, email=email, phone=phone, position=position)
    resume = ResumeAttachment(
        filename=cv.filename,
        content=await cv.read(),
        content_type=cv.content_type,
    )
    return form, resume


class ApplicationRecorder:
    """Persist application records."""

    async def record(self, session: AsyncSession, form: ApplicationForm) -> Application:
        application = Application(
            name=form.name,
            email=form.email,
            phone=form.phone,
            position=form.position,
        )
        try:
            session.add(application)
            await session.commit()
            await session.refresh(application)
        except (SQLAlchemyError, OSError) as exc:
            await session.rollback()
            raise PersistenceError(f"Could not save application: {exc}") from exc

        logger.info("Application saved: %s", application.id)
        return application
