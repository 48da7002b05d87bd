"""Domain layer DI providers."""

from dishka import Scope, provide

from outpost.config import Settings
from outpost.domain.repository import UserRepository
from outpost.domain.service import (
    AuthorizationService,
    IdentifierGenerator,
    RandomIdentifierGenerator,
)
from outpost.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Services are REQUEST-scoped; the repository they share is APP-scoped,
    so every request sees the same registry.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_identifier_generator(self, settings: Settings) -> IdentifierGenerator:
        """Provide the CSPRNG-backed user id generator."""
        return RandomIdentifierGenerator(num_bytes=settings.identifiers.num_bytes)

    @provide
    def get_authorization_service(
        self,
        user_repository: UserRepository,
        identifier_generator: IdentifierGenerator,
    ) -> AuthorizationService:
        """Provide authorization domain service."""
        return AuthorizationService(
            user_repository=user_repository,
            identifier_generator=identifier_generator,
        )
