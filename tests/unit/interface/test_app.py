"""Unit tests for thread session wiring."""

import pytest

from discuss.domain.repository import CommentRepository, UserRepository
from discuss.domain.value import ExternalUserId
from discuss.interface import app as app_module
from discuss.interface.app import thread_session
from discuss.interface.render.expansion import ExpansionPolicy
from tests.conftest import POST_ID, make_comment
from tests.di import build_test_container


class TestThreadSession:
    """Tests for thread_session."""

    @pytest.mark.asyncio
    async def test_session_registers_viewer_and_cleans_up(self):
        """A session should bind the viewer and drop its state on exit."""
        # Arrange
        container = build_test_container()

        try:
            # Act
            async with thread_session(
                container, ExternalUserId("ext-ada"), name="Ada"
            ) as controller:
                registered = await controller.directory.user_repository.find_by_external_id(
                    ExternalUserId("ext-ada")
                )
                comment_repo = controller.store.comment_repository
                await comment_repo.save(make_comment("A", author_id=controller.viewer.id))
                opened = await controller.open(POST_ID)
                lines = controller.render()
                store = controller.store

            # Assert
            assert registered == controller.viewer
            assert opened
            assert lines[0] == "1 Comment"
            assert lines[1].startswith("Ada · ")
            assert store.roots == ()
            assert len(controller.directory) == 0
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_sessions_do_not_share_state(self):
        container = build_test_container()

        try:
            async with thread_session(container, ExternalUserId("ext-1"), name="One") as first:
                async with thread_session(
                    container, ExternalUserId("ext-2"), name="Two"
                ) as second:
                    assert first.store is not second.store
                    assert first.directory is not second.directory
                    assert isinstance(second.store.comment_repository, CommentRepository)
                    assert isinstance(
                        second.directory.user_repository, UserRepository
                    )
        finally:
            await container.close()


class TestCreateApp:
    """Tests for create_app."""

    @pytest.mark.asyncio
    async def test_configures_observability_and_builds_container(self, monkeypatch):
        # Arrange
        calls = []
        monkeypatch.setattr(app_module, "configure_logfire", lambda s: calls.append("logfire"))
        monkeypatch.setattr(app_module, "instrument_httpx", lambda: calls.append("httpx"))
        monkeypatch.setenv("THREAD__MAX_DEPTH", "4")

        # Act
        container = app_module.create_app()

        # Assert
        try:
            policy = await container.get(ExpansionPolicy)
            assert policy.max_depth == 4
            assert calls == ["logfire", "httpx"]
        finally:
            await container.close()
