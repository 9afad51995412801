"""Unit tests for SubmitCommentUseCase."""

import pytest

from discuss.application.thread_store import ThreadStore
from discuss.application.usecase.comment import (
    SubmitCommentRequest,
    SubmitCommentUseCase,
)
from discuss.domain.error import RejectedOperation, ValidationError
from discuss.domain.repository import CommentRepository, UserRepository
from discuss.domain.value import CommentId, UserId
from tests.conftest import POST_ID, make_user, scenario_comments
from tests.harness import create_env_fixture

# Unit test fixture - in-memory Comment Service
unit_env = create_env_fixture()


async def loaded_thread(unit_env) -> ThreadStore:
    comment_repo = await unit_env.get(CommentRepository)
    for comment in scenario_comments():
        await comment_repo.save(comment)
    store = await unit_env.get(ThreadStore)
    await store.load_roots(POST_ID)
    return store


class TestSubmitCommentUseCase:
    """Tests for SubmitCommentUseCase."""

    @pytest.mark.asyncio
    async def test_root_comment_is_shown_first(self, unit_env):
        """A new root comment should be created and placed before the others."""
        # Arrange
        store = await loaded_thread(unit_env)
        use_case = await unit_env.get(SubmitCommentUseCase)

        # Act
        response = await use_case.execute(
            SubmitCommentRequest(
                post_id=POST_ID, author_id=UserId("user-1"), text="  Hello  "
            )
        )

        # Assert
        assert response.placed
        assert response.comment.text == "Hello"
        assert store.roots[0].id == response.comment.id
        assert store.total_visible_count() == 6

    @pytest.mark.asyncio
    async def test_reply_is_placed_under_parent(self, unit_env):
        # Arrange
        store = await loaded_thread(unit_env)
        use_case = await unit_env.get(SubmitCommentUseCase)

        # Act
        response = await use_case.execute(
            SubmitCommentRequest(
                post_id=POST_ID,
                author_id=UserId("user-1"),
                text="Agreed",
                parent_id=CommentId("B"),
            )
        )

        # Assert
        b = store.find(CommentId("B"))
        assert response.placed
        assert response.comment.parent_id == "B"
        assert b.children[0].id == response.comment.id
        assert b.descendant_count == 1

    @pytest.mark.asyncio
    async def test_reply_to_unloaded_parent_is_created_but_not_placed(self, unit_env):
        # Arrange
        store = await loaded_thread(unit_env)
        use_case = await unit_env.get(SubmitCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)

        # Act
        response = await use_case.execute(
            SubmitCommentRequest(
                post_id=POST_ID,
                author_id=UserId("user-1"),
                text="Deep reply",
                parent_id=CommentId("E"),
            )
        )

        # Assert
        assert not response.placed
        assert await comment_repo.find_by_id(response.comment.id) is not None
        assert store.find(response.comment.id) is None

    @pytest.mark.asyncio
    async def test_empty_text_is_rejected_before_the_service(self, unit_env):
        # Arrange
        store = await loaded_thread(unit_env)
        use_case = await unit_env.get(SubmitCommentUseCase)
        before = store.roots

        # Act / Assert
        with pytest.raises(ValidationError):
            await use_case.execute(
                SubmitCommentRequest(
                    post_id=POST_ID, author_id=UserId("user-1"), text="   "
                )
            )

        assert store.roots is before

    @pytest.mark.asyncio
    async def test_service_rejection_leaves_thread_unchanged(self, unit_env):
        # Arrange
        store = await loaded_thread(unit_env)
        use_case = await unit_env.get(SubmitCommentUseCase)
        before = store.roots

        # Act / Assert
        with pytest.raises(RejectedOperation):
            await use_case.execute(
                SubmitCommentRequest(
                    post_id=POST_ID,
                    author_id=UserId("user-1"),
                    text="Orphan",
                    parent_id=CommentId("missing"),
                )
            )

        assert store.roots is before

    @pytest.mark.asyncio
    async def test_author_is_remembered(self, unit_env):
        # Arrange
        store = await loaded_thread(unit_env)
        user_repo = await unit_env.get(UserRepository)
        await user_repo.save(make_user("u-ada", "Ada"))
        use_case = await unit_env.get(SubmitCommentUseCase)

        # Act
        await use_case.execute(
            SubmitCommentRequest(post_id=POST_ID, author_id=UserId("u-ada"), text="Hi")
        )

        # Assert
        assert store.user_directory.get(UserId("u-ada")).name == "Ada"
