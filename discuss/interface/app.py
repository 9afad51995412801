"""Application wiring for thread views."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Optional

import logfire
from dishka import AsyncContainer

from discuss.application.thread_store import ThreadStore
from discuss.application.usecase.comment import SubmitCommentUseCase
from discuss.config import Settings
from discuss.domain.service import UserDirectory
from discuss.domain.value import ExternalUserId
from discuss.interface.controller import ThreadController
from discuss.interface.render.expansion import ExpansionPolicy
from discuss.util.di.container import create_container
from discuss.util.logging import setup_logging
from discuss.util.observability import configure_logfire, instrument_httpx


def create_app() -> AsyncContainer:
    """Configure logging and observability, then build the DI container.

    Settings are loaded from environment variables automatically.
    """
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)
    # Logfire must be configured before instrumentation
    instrument_httpx()

    return create_container()


@asynccontextmanager
async def thread_session(
    container: AsyncContainer,
    external_id: ExternalUserId,
    name: str,
    email: str = "",
    avatar_url: Optional[str] = None,
) -> AsyncIterator[ThreadController]:
    """Open a thread view for a signed-in viewer.

    The session owns a REQUEST scope: its thread store and user directory
    are discarded when the block exits (sign-out).

    Args:
        container: Application container from ``create_app``
        external_id: Identity-provider user ID of the viewer
        name: Viewer display name
        email: Viewer email
        avatar_url: Viewer avatar

    Yields:
        Controller bound to the viewer
    """
    async with container() as request_container:
        directory = await request_container.get(UserDirectory)
        viewer = await directory.sync_viewer(
            external_id, name=name, email=email, avatar_url=avatar_url
        )
        controller = ThreadController(
            store=await request_container.get(ThreadStore),
            submit_comment=await request_container.get(SubmitCommentUseCase),
            policy=await request_container.get(ExpansionPolicy),
            viewer=viewer,
        )
        logfire.info("Thread session opened", user_id=viewer.id)
        try:
            yield controller
        finally:
            controller.sign_out()
            logfire.info("Thread session closed", user_id=viewer.id)
