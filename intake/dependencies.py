"""FastAPI dependency helpers.

Collaborators are built once in ``create_app`` and kept on ``app.state``;
these providers hand them to route handlers.
"""
from collections.abc import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession

from workflows import ApplicationRecorder, NotificationDispatcher

async def db_session(request: Request) -> AsyncIterator[AsyncSession]:
    async with request.app.state.session_factory() as session:
        yield session

def recorder_provider(request: Request) -> ApplicationRecorder:
    return request.app.state.recorder

def dispatcher_provider(request: Request) -> NotificationDispatcher:
    return request.app.state.dispatcher
