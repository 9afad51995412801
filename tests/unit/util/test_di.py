"""Unit tests for dependency injection wiring."""

import pytest

from discuss.adapter.http import HttpCommentRepository
from discuss.adapter.inmemory import InMemoryCommentRepository
from discuss.application.thread_store import ThreadStore
from discuss.domain.repository import CommentRepository
from discuss.interface.render.expansion import ExpansionPolicy
from discuss.util.di import ProdConfigProvider, ProdServiceProvider, ServiceProvider, get_provider
from tests.di import MockServiceProvider, build_test_container


class TestGetProvider:
    """Tests for get_provider."""

    def test_concrete_provider_is_used_as_is(self):
        assert get_provider(ProdConfigProvider) is ProdConfigProvider

    def test_mockable_component_selects_implementation(self):
        assert get_provider(ServiceProvider) is ProdServiceProvider
        assert get_provider(ServiceProvider, use_mock=True) is MockServiceProvider


class TestBuildTestContainer:
    """Tests for the test container builder."""

    def test_unknown_component_is_rejected(self):
        with pytest.raises(ValueError, match="Unknown components"):
            build_test_container(unmock={"database"})

    @pytest.mark.asyncio
    async def test_mocked_container_uses_in_memory_service(self):
        container = build_test_container()
        try:
            async with container() as request_container:
                repo = await request_container.get(CommentRepository)
                store = await request_container.get(ThreadStore)
                policy = await container.get(ExpansionPolicy)

                assert isinstance(repo, InMemoryCommentRepository)
                assert store.comment_repository is repo
                assert policy.max_depth == 3
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_unmocked_container_uses_http_service(self):
        container = build_test_container(unmock={"service"})
        try:
            async with container() as request_container:
                repo = await request_container.get(CommentRepository)

                assert isinstance(repo, HttpCommentRepository)
        finally:
            await container.close()
