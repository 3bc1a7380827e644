"""FastAPI entrypoint wiring the intake workflow together."""
from __future__ import annotations

import logging
import sys

import uvicorn
from fastapi import BackgroundTasks, Depends, FastAPI, File, Form, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as SettingsError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from intake.config import Settings, get_settings
from intake.database import build_engine, build_session_factory, init_models
from intake.dependencies import db_session, dispatcher_provider, recorder_provider
from intake.errors import PersistenceError, ValidationError
from intake.log_config import configure_logging
from intake.schemas import ErrorBody, SubmissionAccepted
from workflows import (
    ApplicationRecorder,
    EmailNotifier,
    NotificationDispatcher,
    WhatsAppNotifier,
    validate_submission,
)
from workflows.notifications import EmailTransport, MessageTransport
from workflows.submission import MISSING_FIELDS_MESSAGE

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Application submitted successfully!"
PERSISTENCE_FAILURE_MESSAGE = "Error submitting application"


def create_app(
    settings: Settings | None = None,
    *,
    recorder: ApplicationRecorder | None = None,
    email_notifier: EmailTransport | None = None,
    message_notifier: MessageTransport | None = None,
    engine: AsyncEngine | None = None,
) -> FastAPI:
    """Build the app. Tables are created on, and sessions bound to, the same engine."""

    settings = settings or get_settings()
    engine = engine or build_engine(settings)

    app = FastAPI(title="Job Application Intake", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.recorder = recorder or ApplicationRecorder()
    app.state.dispatcher = NotificationDispatcher(
        email_notifier or EmailNotifier(settings),
        message_notifier or WhatsAppNotifier(settings),
    )

    @app.on_event("startup")
    async def _startup() -> None:  # pragma: no cover - framework hook
        await init_models(app.state.engine)
        logger.info("Connected to database")

    @app.on_event("shutdown")
    async def _shutdown() -> None:  # pragma: no cover - framework hook
        await app.state.engine.dispose()

    @app.exception_handler(ValidationError)
    async def _invalid_submission(_: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content=ErrorBody(error=str(exc)).model_dump())

    @app.exception_handler(PersistenceError)
    async def _persistence_failed(_: Request, exc: PersistenceError) -> JSONResponse:
        logger.error("Error saving application: %s", exc, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=ErrorBody(error=PERSISTENCE_FAILURE_MESSAGE).model_dump(),
        )

    @app.exception_handler(RequestValidationError)
    async def _malformed_submission(_: Request, exc: RequestValidationError) -> JSONResponse:
        # A text part where the CV belongs, or a file part where text belongs.
        logger.info("Malformed submission: %s", exc.errors())
        return JSONResponse(status_code=400, content=ErrorBody(error=MISSING_FIELDS_MESSAGE).model_dump())

    @app.exception_handler(Exception)
    async def _unexpected_failure(_: Request, exc: Exception) -> JSONResponse:
        logger.error("Error submitting application: %s", exc, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=ErrorBody(error=PERSISTENCE_FAILURE_MESSAGE).model_dump(),
        )

    @app.post("/api/apply", status_code=201, response_model=SubmissionAccepted)
    async def apply(
        background_tasks: BackgroundTasks,
        name: str | None = Form(default=None),
        email: str | None = Form(default=None),
        phone: str | None = Form(default=None),
        position: str | None = Form(default=None),
        cv: UploadFile | None = File(default=None),
        session: AsyncSession = Depends(db_session),
        recorder: ApplicationRecorder = Depends(recorder_provider),
        dispatcher: NotificationDispatcher = Depends(dispatcher_provider),
    ) -> SubmissionAccepted:
        logger.info(
            "Application received: name=%r email=%r phone=%r position=%r",
            name,
            email,
            phone,
            position,
        )
        if cv is not None:
            logger.info("Uploaded file: %s (%s, %s bytes)", cv.filename, cv.content_type, cv.size)

        form, resume = await validate_submission(
            name=name,
            email=email,
            phone=phone,
            position=position,
            cv=cv,
        )
        await recorder.record(session, form)
        dispatcher.schedule(background_tasks, form, resume)
        return SubmissionAccepted(message=SUCCESS_MESSAGE)

    return app


def serve() -> None:
    """Run the service under uvicorn, refusing to start on incomplete configuration."""

    configure_logging()
    try:
        settings = get_settings()
    except SettingsError as exc:
        logger.error("Invalid configuration, refusing to start:\n%s", exc)
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level.upper())
    app = create_app(settings)
    logger.info("Server running on port %s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    serve()
