"""Domain layer DI providers."""

from dishka import Scope, provide

from discuss.domain.repository import UserRepository
from discuss.domain.service import TreeMaterializer, UserDirectory
from discuss.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    REQUEST scope is one viewer session: each session gets its own user
    directory, dropped with the scope on sign-out.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_tree_materializer(self) -> TreeMaterializer:
        """Provide the stateless tree materializer."""
        return TreeMaterializer()

    @provide
    def get_user_directory(self, user_repository: UserRepository) -> UserDirectory:
        """Provide the session user directory."""
        return UserDirectory(user_repository=user_repository)
