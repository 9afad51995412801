"""Application layer DI providers."""

from dishka import Scope, provide

from discuss.application.thread_store import ThreadStore
from discuss.application.usecase.comment import SubmitCommentUseCase
from discuss.config import ThreadSettings
from discuss.domain.repository import CommentRepository
from discuss.domain.service import TreeMaterializer, UserDirectory
from discuss.interface.render.expansion import ExpansionPolicy
from discuss.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application provider - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_thread_store(
        self,
        comment_repository: CommentRepository,
        materializer: TreeMaterializer,
        user_directory: UserDirectory,
        thread_settings: ThreadSettings,
    ) -> ThreadStore:
        """Provide the session thread store."""
        return ThreadStore(
            comment_repository=comment_repository,
            materializer=materializer,
            user_directory=user_directory,
            sort_order=thread_settings.default_sort,
        )

    @provide(scope=Scope.REQUEST)
    def get_submit_comment_use_case(
        self, comment_repository: CommentRepository, thread_store: ThreadStore
    ) -> SubmitCommentUseCase:
        """Provide submit comment use case."""
        return SubmitCommentUseCase(
            comment_repository=comment_repository, thread_store=thread_store
        )

    @provide(scope=Scope.APP)
    def get_expansion_policy(self, thread_settings: ThreadSettings) -> ExpansionPolicy:
        """Provide expansion policy with the configured maximum depth."""
        return ExpansionPolicy(max_depth=thread_settings.max_depth)
